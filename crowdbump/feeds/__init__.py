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

"""Release feed handling for crowdbump.

This package turns Atlassian's JSONP download feeds into a mapping from
"major.minor" version key to the newest installable archive.

Modules:
    models : Package dataclass.
    parser : Feed download and JSONP/JSON decoding.
    filters : Installable-archive predicate.
    selector : Latest-release selection across feeds.

Example:
    ```python
    from crowdbump.feeds import resolve_versions

    versions = resolve_versions(primary_url, [archive_url, eap_url])
    ```
"""

from .filters import filter_packages, is_installable_archive
from .models import Package
from .parser import (
    extract_jsonp_payload,
    fetch_feed,
    make_session,
    parse_feed_document,
    parse_release_date,
)
from .selector import merge_packages, resolve_versions

__all__ = [
    "Package",
    "extract_jsonp_payload",
    "fetch_feed",
    "filter_packages",
    "is_installable_archive",
    "make_session",
    "merge_packages",
    "parse_feed_document",
    "parse_release_date",
    "resolve_versions",
]
