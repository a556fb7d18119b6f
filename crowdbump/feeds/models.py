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

"""Release feed record type for crowdbump."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from urllib.parse import urlparse

from crowdbump.versioning import major_minor


@dataclass(frozen=True)
class Package:
    """A candidate release read from a release feed.

    Attributes:
        archive_url: Download URL of the distributable archive (feed
            field "zipUrl").
        version: Raw version string as published (e.g., "4.3.1").
        released: Publication date.
        is_primary: True if the package came from the primary (current)
            feed rather than an archive or early-access feed.
    """

    archive_url: str
    version: str
    released: date
    is_primary: bool = False

    @property
    def filename(self) -> str:
        """Last path segment of the archive URL."""
        path = urlparse(self.archive_url).path or self.archive_url
        return path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def version_key(self) -> str:
        """The "major.minor" key this package belongs to."""
        return major_minor(self.version)
