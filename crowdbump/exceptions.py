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

"""Exception hierarchy for crowdbump.

This module defines a custom exception hierarchy that allows callers to
distinguish between the ways an update run can fail:

- ConfigError: Configuration file missing, unparsable, or invalid
- FeedFetchError: A release feed could not be downloaded
- FeedFormatError: A release feed was downloaded but could not be parsed
- MissingVersionError: A tracked directory has no matching release
- DirectoryListError: The build root could not be listed
- ArtifactWriteError: Dockerfile or entrypoint generation failed

All exceptions inherit from CrowdbumpError, allowing callers to catch every
crowdbump failure with a single except clause. None of them are recovered
inside the library: every one aborts the run.

Example:
    Catching specific error types:
        ```python
        from pathlib import Path
        from crowdbump.core import update_build_dirs
        from crowdbump.exceptions import FeedError, MissingVersionError

        try:
            update_build_dirs(Path("."))
        except FeedError as e:
            print(f"Feed problem at {e.url}: {e}")
        except MissingVersionError as e:
            print(f"No release for {e.version_key}")
        ```
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "CrowdbumpError",
    "ConfigError",
    "FeedError",
    "FeedFetchError",
    "FeedFormatError",
    "MissingVersionError",
    "DirectoryListError",
    "ArtifactWriteError",
]


class CrowdbumpError(Exception):
    """Base exception for all crowdbump errors."""

    pass


class ConfigError(CrowdbumpError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - An explicitly requested config file that does not exist
    - YAML parsing (syntax errors, non-mapping top level)
    - Invalid field values (empty feed URL, bad permission modes)
    """

    pass


class FeedError(CrowdbumpError):
    """Base class for release feed failures.

    Attributes:
        url: The feed URL that failed.
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class FeedFetchError(FeedError):
    """Raised when a feed request cannot be completed.

    Covers connection failures, non-2xx responses and bodies that cannot be
    decoded as text.
    """

    pass


class FeedFormatError(FeedError):
    """Raised when a feed body is not a valid JSONP-wrapped package list.

    Covers a missing or inverted ``(``/``)`` envelope, invalid JSON, records of
    the wrong shape and unparsable release dates.
    """

    pass


class MissingVersionError(CrowdbumpError):
    """Raised when a tracked directory has no resolved package.

    Attributes:
        version_key: The directory name that had no match.
    """

    def __init__(self, version_key: str) -> None:
        super().__init__(f"can't find url for version {version_key}")
        self.version_key = version_key


class DirectoryListError(CrowdbumpError):
    """Raised when the build root cannot be listed.

    Attributes:
        path: The directory that could not be read.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ArtifactWriteError(CrowdbumpError):
    """Raised when build artifacts cannot be generated.

    This covers reading the Dockerfile template or entrypoint source, writing
    the rendered Dockerfile, copying the entrypoint and fixing its mode.
    """

    pass
