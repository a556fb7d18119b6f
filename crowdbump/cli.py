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

"""Command-line interface for crowdbump.

Commands:

    update: Regenerate every tracked version directory
    resolve: Show the release each directory would be updated to

Example:
    Update the build directories under the current directory:
        ```bash
        $ crowdbump update
        ```

    Preview against another root with a custom config:
        ```bash
        $ crowdbump resolve --root ../crowd-docker --config jira.yaml
        ```

    Enable debug output:
        ```bash
        $ crowdbump update --debug
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, feed, missing version, or write failure)

Note:
    Each command has its own handler function (cmd_<command>). Verbose mode
    shows full tracebacks on errors for debugging.

"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from crowdbump import __version__
from crowdbump.core import resolve_build_dirs, update_build_dirs
from crowdbump.exceptions import CrowdbumpError
from crowdbump.logging import get_logger, set_global_logger


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def cmd_update(args: argparse.Namespace) -> int:
    """Handler for 'crowdbump update' command.

    Args:
        args: Parsed command-line arguments containing root, config path
            and verbosity flags.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    root = Path(args.root).resolve()
    print(f"Updating build directories in: {root}")
    print()

    try:
        results = update_build_dirs(root, config_path=args.config, logger=logger)
    except CrowdbumpError as err:
        return _report_error(err, args)

    print()
    print("=" * 70)
    print("UPDATE RESULTS")
    print("=" * 70)
    for result in results:
        pkg = result.package
        latest = " (latest)" if pkg.is_primary else ""
        print(
            f"{result.version_key:<8} {pkg.version:<20} "
            f"{pkg.released.isoformat()}{latest}"
        )
    print("=" * 70)
    print()
    print(f"[SUCCESS] Updated {len(results)} directories.")
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handler for 'crowdbump resolve' command.

    Resolves every tracked directory against the feeds without writing
    anything.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    root = Path(args.root).resolve()
    print(f"Resolving build directories in: {root}")
    print()

    try:
        result = resolve_build_dirs(root, config_path=args.config, logger=logger)
    except CrowdbumpError as err:
        return _report_error(err, args)

    print()
    print("=" * 70)
    print("RESOLVED RELEASES")
    print("=" * 70)
    for name in result.tracked:
        pkg = result.packages[name]
        latest = " (latest)" if pkg.is_primary else ""
        print(f"{name:<8} {pkg.version:<20} {pkg.released.isoformat()}{latest}")
        print(f"         {pkg.archive_url}")
    untracked = [k for k in result.available if k not in result.packages]
    if untracked and (args.verbose or args.debug):
        print()
        print(f"Untracked lines in feeds: {', '.join(untracked)}")
    print("=" * 70)
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Build root containing the version directories (default: .)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: <root>/crowdbump.yaml if present)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crowdbump",
        description="Keep versioned Docker build directories on the latest release.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"crowdbump {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_update = subparsers.add_parser(
        "update",
        help="Regenerate every tracked version directory",
        description="Resolve the latest release of each version line and rewrite its Dockerfile and entrypoint.",
    )
    _add_common_arguments(parser_update)
    parser_update.set_defaults(func=cmd_update)

    parser_resolve = subparsers.add_parser(
        "resolve",
        help="Show the release each directory would use",
        description="Resolve the latest release of each version line without writing any files.",
    )
    _add_common_arguments(parser_resolve)
    parser_resolve.set_defaults(func=cmd_resolve)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
