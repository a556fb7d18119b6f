# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tracked build directory discovery.

Every visible subdirectory of the build root is a version line to keep
current, named after its "major.minor" key (e.g., "4.3/").
"""

from __future__ import annotations

from pathlib import Path

from crowdbump.exceptions import DirectoryListError
from crowdbump.logging import Logger, get_global_logger

HIDDEN_PREFIX = "."


def list_version_dirs(root: Path, logger: Logger | None = None) -> list[str]:
    """List the tracked version directories under root.

    Args:
        root: Build root directory.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        Names of the immediate, non-hidden subdirectories, sorted by name.
        Symbolic links are not followed, even when they point at a directory.
        Files are ignored.

    Raises:
        DirectoryListError: If root does not exist, is not a directory, or
            cannot be read.
    """
    if logger is None:
        logger = get_global_logger()

    root = Path(root)
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as err:
        raise DirectoryListError(
            f"error listing version dirs in {root}: {err}", root
        ) from err

    dirs = [
        entry.name
        for entry in entries
        if entry.is_dir()
        and not entry.is_symlink()
        and not entry.name.startswith(HIDDEN_PREFIX)
    ]
    logger.verbose("DIRS", f"Tracked directories: {', '.join(dirs) or '(none)'}")
    return dirs
