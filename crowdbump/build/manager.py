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

"""Build directory regeneration for crowdbump.

This module writes the artifacts of one tracked version directory:

- Dockerfile: rendered from the root template for the resolved package
- docker-entrypoint.sh: copied from the root and made executable

Private Helpers:
    - _write_dockerfile: Write rendered text with the configured mode
    - _install_entrypoint: Copy the entrypoint and fix its mode

Design Principles:
    - Files are overwritten in place (truncate, not append)
    - The entrypoint mode is re-applied after every copy, including over
      a pre-existing file
    - Any OS error aborts with ArtifactWriteError naming the directory

Example:
    from pathlib import Path
    from crowdbump.build import update_build_dir

    result = update_build_dir(
        Path("4.3"),
        package,
        template_text=Path("Dockerfile.tmpl").read_text(),
        entrypoint_src=Path("docker-entrypoint.sh"),
    )
    print(result.dockerfile_path)
"""

from __future__ import annotations

import os
from pathlib import Path
import shutil

from crowdbump.exceptions import ArtifactWriteError
from crowdbump.feeds.models import Package
from crowdbump.logging import Logger, get_global_logger
from crowdbump.results import UpdateResult

from .template import render_dockerfile

DEFAULT_DOCKERFILE_NAME = "Dockerfile"
DEFAULT_DOCKERFILE_MODE = 0o644
DEFAULT_ENTRYPOINT_MODE = 0o764


def _write_dockerfile(path: Path, text: str, mode: int) -> None:
    fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, mode)
    with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def _install_entrypoint(src: Path, dst: Path, mode: int) -> None:
    shutil.copyfile(src, dst)
    os.chmod(dst, mode)


def update_build_dir(
    build_dir: Path,
    package: Package,
    template_text: str,
    entrypoint_src: Path,
    *,
    dockerfile_name: str = DEFAULT_DOCKERFILE_NAME,
    dockerfile_mode: int = DEFAULT_DOCKERFILE_MODE,
    entrypoint_mode: int = DEFAULT_ENTRYPOINT_MODE,
    logger: Logger | None = None,
) -> UpdateResult:
    """Regenerate the Dockerfile and entrypoint of one version directory.

    Args:
        build_dir: Version directory (its name is the version key).
        package: Resolved package for this directory.
        template_text: Dockerfile template source.
        entrypoint_src: Entrypoint script to copy into the directory.
        dockerfile_name: Output file name. Default is "Dockerfile".
        dockerfile_mode: Mode for a newly created Dockerfile.
        entrypoint_mode: Mode applied to the copied entrypoint.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        Paths written and the package they reference.

    Raises:
        ArtifactWriteError: If any file cannot be written, copied or
            chmod-ed.
    """
    if logger is None:
        logger = get_global_logger()

    build_dir = Path(build_dir)
    version_key = build_dir.name
    dockerfile_path = build_dir / dockerfile_name
    entrypoint_path = build_dir / Path(entrypoint_src).name

    text = render_dockerfile(template_text, package, version_key)
    try:
        _write_dockerfile(dockerfile_path, text, dockerfile_mode)
        logger.verbose("BUILD", f"Wrote {dockerfile_path}")
        _install_entrypoint(Path(entrypoint_src), entrypoint_path, entrypoint_mode)
        logger.verbose(
            "BUILD", f"Installed {entrypoint_path} (mode {entrypoint_mode:o})"
        )
    except OSError as err:
        raise ArtifactWriteError(f"error updating {version_key}: {err}") from err

    return UpdateResult(
        version_key=version_key,
        build_dir=build_dir,
        package=package,
        dockerfile_path=dockerfile_path,
        entrypoint_path=entrypoint_path,
    )
