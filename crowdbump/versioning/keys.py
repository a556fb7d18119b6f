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

"""Version key derivation for crowdbump.

This module is format-agnostic: it does NOT download or read files. It only
reduces raw version strings published by the release feeds to the
"major.minor" key that names a build directory.
"""

from __future__ import annotations

import re

# Key used for version strings that have no minor component.
FALLBACK_KEY = "0.0"

_VERSION_SEP = re.compile(r"[.-]")


def major_minor(version: str) -> str:
    """Derive the "major.minor" key of a raw version string.

    The string is split on "." or "-" into at most three pieces and the
    first two are joined with ".". Strings that do not split into at least
    two pieces map to FALLBACK_KEY. Never raises.

    Args:
        version: Raw version text (e.g., "4.3.1", "4.3.1-standalone").

    Returns:
        The version key (e.g., "4.3").

    Example:
        >>> major_minor("4.3.1")
        '4.3'
        >>> major_minor("4.3.1-standalone")
        '4.3'
        >>> major_minor("5")
        '0.0'
    """
    parts = _VERSION_SEP.split(version, maxsplit=2)
    if len(parts) < 2:
        return FALLBACK_KEY
    return f"{parts[0]}.{parts[1]}"
