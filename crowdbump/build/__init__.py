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

"""Build directory management for crowdbump.

This package lists the tracked version directories and regenerates their
artifacts (Dockerfile and docker-entrypoint.sh).

Example:
    ```python
    from pathlib import Path
    from crowdbump.build import list_version_dirs

    for name in list_version_dirs(Path(".")):
        print(name)
    ```
"""

from .directories import list_version_dirs
from .manager import update_build_dir
from .template import build_template_vars, load_template, render_dockerfile

__all__ = [
    "build_template_vars",
    "list_version_dirs",
    "load_template",
    "render_dockerfile",
    "update_build_dir",
]
