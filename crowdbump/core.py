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

"""Core orchestration for crowdbump.

This module ties the pipeline together: list the tracked version
directories, resolve the newest package of every version line from the
release feeds, then regenerate each directory's artifacts.

Workflow (update_build_dirs):
    1. Load configuration (defaults + optional crowdbump.yaml)
    2. Read the Dockerfile template and check the entrypoint source
    3. List tracked directories under the build root
    4. Fetch and resolve every feed (secondary feeds first, primary last)
    5. For each directory, in listing order, look up its package and
       regenerate its Dockerfile and entrypoint

The run is strictly sequential and stops at the first error. Directories
already regenerated before the failure keep their new content.

Example:
    Update every build directory under the current directory:
        ```python
        from pathlib import Path
        from crowdbump.core import update_build_dirs

        for result in update_build_dirs(Path(".")):
            print(result.version_key, result.package.version)
        ```

    Preview without writing:
        ```python
        from crowdbump.core import resolve_build_dirs

        preview = resolve_build_dirs(Path("."))
        print(preview.packages["4.3"].archive_url)
        ```
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Any

from crowdbump.build import list_version_dirs, load_template, update_build_dir
from crowdbump.config import load_config
from crowdbump.exceptions import ArtifactWriteError, MissingVersionError
from crowdbump.feeds import Package, fetch_feed, make_session, resolve_versions
from crowdbump.feeds.parser import DEFAULT_USER_AGENT
from crowdbump.feeds.selector import FeedFetcher
from crowdbump.logging import Logger, get_global_logger
from crowdbump.results import ResolveResult, UpdateResult


def _resolve(
    root: Path,
    config: dict[str, Any],
    fetch: FeedFetcher | None,
    logger: Logger,
    step_offset: int,
    total: int,
) -> tuple[list[str], dict[str, Package]]:
    """List tracked directories and resolve the feeds."""
    logger.step(step_offset + 1, total, "Listing version directories...")
    tracked = list_version_dirs(root, logger=logger)

    logger.step(step_offset + 2, total, "Reading release feeds...")
    feeds = config["feeds"]
    http = config["http"]
    if fetch is not None:
        versions = resolve_versions(
            feeds["primary"], feeds["secondary"], fetch=fetch, logger=logger
        )
    else:
        with make_session(http.get("user_agent") or DEFAULT_USER_AGENT) as session:
            versions = resolve_versions(
                feeds["primary"],
                feeds["secondary"],
                fetch=partial(
                    fetch_feed,
                    session=session,
                    timeout=http.get("timeout"),
                    logger=logger,
                ),
                logger=logger,
            )
    return tracked, versions


def _lookup(versions: dict[str, Package], version_key: str) -> Package:
    try:
        return versions[version_key]
    except KeyError:
        raise MissingVersionError(version_key) from None


def resolve_build_dirs(
    root: Path,
    config: dict[str, Any] | None = None,
    *,
    config_path: Path | None = None,
    fetch: FeedFetcher | None = None,
    logger: Logger | None = None,
) -> ResolveResult:
    """Resolve the package for every tracked directory without writing.

    Args:
        root: Build root containing one directory per version line.
        config: Configuration as returned by load_config. Loaded from
            root when omitted.
        config_path: Explicit config file (only used when config is None).
        fetch: Feed fetcher override (tests). Defaults to fetch_feed with
            a shared session.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        Tracked directories with their resolved packages.

    Raises:
        ConfigError: If the configuration is invalid.
        DirectoryListError: If root cannot be listed.
        FeedFetchError: If a feed cannot be fetched.
        FeedFormatError: If a feed cannot be parsed.
        MissingVersionError: If a tracked directory has no package.
    """
    if logger is None:
        logger = get_global_logger()
    root = Path(root)
    if config is None:
        config = load_config(root, config_path)

    tracked, versions = _resolve(root, config, fetch, logger, 0, 2)
    packages = {name: _lookup(versions, name) for name in tracked}
    return ResolveResult(
        tracked=tracked, packages=packages, available=sorted(versions)
    )


def update_build_dirs(
    root: Path,
    config: dict[str, Any] | None = None,
    *,
    config_path: Path | None = None,
    fetch: FeedFetcher | None = None,
    logger: Logger | None = None,
) -> list[UpdateResult]:
    """Regenerate the artifacts of every tracked version directory.

    Args:
        root: Build root containing one directory per version line, the
            Dockerfile template and the entrypoint script.
        config: Configuration as returned by load_config. Loaded from
            root when omitted.
        config_path: Explicit config file (only used when config is None).
        fetch: Feed fetcher override (tests). Defaults to fetch_feed with
            a shared session.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        One result per updated directory, in processing order.

    Raises:
        ConfigError: If the configuration is invalid.
        ArtifactWriteError: If the template or entrypoint cannot be read,
            or a directory cannot be written.
        DirectoryListError: If root cannot be listed.
        FeedFetchError: If a feed cannot be fetched.
        FeedFormatError: If a feed cannot be parsed.
        MissingVersionError: If a tracked directory has no package.
    """
    if logger is None:
        logger = get_global_logger()
    root = Path(root)
    if config is None:
        config = load_config(root, config_path)
    build = config["build"]

    logger.step(1, 4, "Loading build templates...")
    template_text = load_template(Path(build["template"]))
    entrypoint_src = Path(build["entrypoint"])
    if not entrypoint_src.is_file():
        raise ArtifactWriteError(f"entrypoint script not found: {entrypoint_src}")

    tracked, versions = _resolve(root, config, fetch, logger, 1, 4)

    logger.step(4, 4, f"Updating {len(tracked)} version directories...")
    results: list[UpdateResult] = []
    for name in tracked:
        package = _lookup(versions, name)
        logger.verbose("BUILD", f"{name}: {package.version} ({package.archive_url})")
        results.append(
            update_build_dir(
                root / name,
                package,
                template_text,
                entrypoint_src,
                dockerfile_name=build["output"],
                dockerfile_mode=build["output_mode"],
                entrypoint_mode=build["entrypoint_mode"],
                logger=logger,
            )
        )
    return results
