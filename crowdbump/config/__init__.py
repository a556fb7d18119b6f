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

"""Configuration loading for crowdbump.

Built-in defaults are merged with an optional YAML file (crowdbump.yaml at
the build root, or a path given with --config).

Public API:

- load_config: Load and merge configuration for a build root
- DEFAULT_CONFIG: The built-in defaults

Example:
    Basic usage:

        from pathlib import Path
        from crowdbump.config import load_config

        config = load_config(Path("."))
        print(config["feeds"]["primary"])

"""

from .loader import CONFIG_FILENAME, DEFAULT_CONFIG, load_config

__all__ = ["CONFIG_FILENAME", "DEFAULT_CONFIG", "load_config"]
