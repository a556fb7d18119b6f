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

"""Package variant filtering for crowdbump.

The feeds list every distribution of a release: zip and tar.gz archives,
Windows installers, WAR-only builds, Data Center (cluster) builds and
enterprise editions. Only plain tar.gz archives (or the standalone enterprise
tarball) can be dropped into the container image.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Package


def is_installable_archive(package: Package) -> bool:
    """Return True if the package is a tar.gz archive usable in the image.

    All of the following must hold for the archive filename:

    - it contains ".tar.gz"
    - if it contains "enterprise", it also contains "standalone"
    - it does not contain "cluster"
    - it does not contain "war"

    Example:
        >>> is_installable_archive(Package(
        ...     ".../atlassian-crowd-4.3.1-enterprise-standalone.tar.gz",
        ...     "4.3.1", date(2021, 1, 10)))
        True
    """
    filename = package.filename
    is_tarball = ".tar.gz" in filename
    standalone_if_enterprise = "enterprise" not in filename or "standalone" in filename
    not_cluster = "cluster" not in filename
    not_war = "war" not in filename
    return is_tarball and standalone_if_enterprise and not_cluster and not_war


def filter_packages(packages: Iterable[Package]) -> list[Package]:
    """Keep installable archives, preserving feed order."""
    return [p for p in packages if is_installable_archive(p)]
