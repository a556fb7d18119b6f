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

"""Release feed download and parsing for crowdbump.

Atlassian publishes its download feeds as JSONP: a JSON array wrapped in a
callback invocation such as ``downloads([...])``. This module fetches such a
document and turns it into Package records.

Feed Record Fields:
    - **zipUrl** (str): Archive download URL.
    - **version** (str): Free-form version string.
    - **released** (str): Publication date in "DD-Mon-YYYY" form
      (e.g., "02-Mar-2021").

    Other fields (description, edition, md5, size, ...) are ignored.

Workflow:
    1. GET the feed URL (one request, no retries)
    2. Decode the body as UTF-8 text
    3. Take the text strictly between the first "(" and the last ")"
    4. Decode it as a JSON array of objects
    5. Build a Package per record, parsing the release date

Error Handling:
    - FeedFetchError: Connection failures, non-2xx status, undecodable body
    - FeedFormatError: Missing envelope, invalid JSON, wrong record shape,
      unparsable date
    - Errors are chained with 'from err' and name the feed URL

Example:
    Fetch the current Crowd feed:
        ```python
        from crowdbump.feeds.parser import fetch_feed

        packages = fetch_feed(
            "https://my.atlassian.com/download/feeds/current/crowd.json"
        )
        for pkg in packages:
            print(pkg.version, pkg.released, pkg.archive_url)
        ```

    Parse a document already in memory:
        ```python
        from crowdbump.feeds.parser import parse_feed_document

        text = 'downloads([{"zipUrl": "...", "version": "4.3.1", '
        text += '"released": "10-Jan-2021"}])'
        packages = parse_feed_document(text)
        ```
"""

from __future__ import annotations

from datetime import date, datetime
import json
import re
from typing import Any

import requests

from crowdbump import __version__
from crowdbump.exceptions import FeedFetchError, FeedFormatError
from crowdbump.logging import Logger, get_global_logger

from .models import Package

RELEASE_DATE_FORMAT = "%d-%b-%Y"
_RELEASE_DATE_RE = re.compile(r"\d{2}-[A-Za-z]{3}-\d{4}")

DEFAULT_USER_AGENT = f"crowdbump/{__version__}"


def make_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    """Create a requests.Session for feed downloads.

    No retry adapter is mounted: a failed request fails the run.
    """
    s = requests.Session()
    s.headers.update({"User-Agent": user_agent})
    return s


def extract_jsonp_payload(text: str, url: str = "") -> str:
    """Return the JSON text enclosed by a JSONP callback.

    Args:
        text: Full feed body.
        url: Feed URL, used in error messages.

    Returns:
        The substring strictly between the first "(" and the last ")".

    Raises:
        FeedFormatError: If either parenthesis is missing or the last ")"
            is not after the first "(".
    """
    start = text.find("(")
    end = text.rfind(")")
    if start == -1 or end == -1 or end <= start:
        raise FeedFormatError(f"error in jsonp content from {url or 'feed'}", url)
    return text[start + 1 : end]


def parse_release_date(value: Any, url: str = "") -> date:
    """Parse a feed "released" value such as "02-Mar-2021".

    Raises:
        FeedFormatError: If the value is not a string in DD-Mon-YYYY form.
    """
    if not isinstance(value, str) or not _RELEASE_DATE_RE.fullmatch(value):
        raise FeedFormatError(
            f"invalid release date {value!r} in {url or 'feed'}", url
        )
    try:
        return datetime.strptime(value, RELEASE_DATE_FORMAT).date()
    except ValueError as err:
        raise FeedFormatError(
            f"invalid release date {value!r} in {url or 'feed'}: {err}", url
        ) from err


def _package_from_record(record: Any, url: str) -> Package:
    if not isinstance(record, dict):
        raise FeedFormatError(
            f"expected an object per package in {url or 'feed'}, "
            f"got {type(record).__name__}",
            url,
        )
    return Package(
        archive_url=str(record.get("zipUrl") or ""),
        version=str(record.get("version") or ""),
        # Records without a date sort before every dated release.
        released=(
            parse_release_date(record["released"], url)
            if "released" in record
            else date.min
        ),
    )


def parse_feed_document(text: str, url: str = "") -> list[Package]:
    """Parse a JSONP feed body into packages.

    Args:
        text: Full feed body.
        url: Feed URL, used in error messages.

    Returns:
        One Package per record, in feed order, all with is_primary=False.

    Raises:
        FeedFormatError: On envelope, JSON, record shape or date errors.
    """
    payload = extract_jsonp_payload(text, url)
    try:
        records = json.loads(payload)
    except json.JSONDecodeError as err:
        raise FeedFormatError(
            f"invalid JSON in {url or 'feed'}: {err}", url
        ) from err

    if not isinstance(records, list):
        raise FeedFormatError(
            f"expected a JSON array in {url or 'feed'}, "
            f"got {type(records).__name__}",
            url,
        )
    return [_package_from_record(record, url) for record in records]


def fetch_feed(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
    logger: Logger | None = None,
) -> list[Package]:
    """Download and parse one release feed.

    Args:
        url: Feed URL.
        session: Session to reuse. A temporary one is created (and
            closed) when omitted.
        timeout: Request timeout in seconds. None leaves the transport
            default in place.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        Every package record in the feed, unfiltered.

    Raises:
        FeedFetchError: If the request fails or the body is not UTF-8.
        FeedFormatError: If the body cannot be parsed.
    """
    if logger is None:
        logger = get_global_logger()

    logger.verbose("FEED", f"GET {url}")
    owns_session = session is None
    if session is None:
        session = make_session()
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as err:
        raise FeedFetchError(
            f"error fetching {url}: {response.status_code} {response.reason}", url
        ) from err
    except requests.RequestException as err:
        raise FeedFetchError(f"error fetching {url}: {err}", url) from err
    finally:
        if owns_session:
            session.close()

    logger.verbose("FEED", f"Response: {response.status_code} {response.reason}")

    try:
        text = response.content.decode("utf-8")
    except UnicodeDecodeError as err:
        raise FeedFetchError(f"error reading body of {url}: {err}", url) from err

    packages = parse_feed_document(text, url)
    logger.verbose("FEED", f"Parsed {len(packages)} package record(s)")
    return packages
