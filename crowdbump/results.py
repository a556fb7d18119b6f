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

"""Public API return types for crowdbump.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. The Package domain
    type stays with the feed code in crowdbump.feeds.models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from crowdbump.feeds.models import Package


@dataclass(frozen=True)
class UpdateResult:
    """Result from regenerating one build directory.

    Attributes:
        version_key: Directory name / "major.minor" key.
        build_dir: Path to the build directory.
        package: The package the artifacts now reference.
        dockerfile_path: Path of the rendered Dockerfile.
        entrypoint_path: Path of the copied entrypoint script.
    """

    version_key: str
    build_dir: Path
    package: Package
    dockerfile_path: Path
    entrypoint_path: Path


@dataclass(frozen=True)
class ResolveResult:
    """Result from resolving tracked directories without writing.

    Attributes:
        tracked: Tracked directory names, in processing order.
        packages: Resolved package for each tracked directory.
        available: Every version key found in the feeds.
    """

    tracked: list[str]
    packages: dict[str, Package]
    available: list[str] = field(default_factory=list)
