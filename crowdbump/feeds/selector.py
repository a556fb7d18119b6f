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

"""Latest-release selection across release feeds.

Several feeds describe the same product: the current feed (primary), the
archive of older releases and the early-access (EAP) feed. For every
"major.minor" line this module keeps the single most recently released
installable package, and remembers whether the primary feed listed that line.

Selection Rules:
    - Candidates are compared by release date only; a later date replaces
      the stored package and on an exact tie the package processed last wins.
    - Packages from the primary feed are flagged is_primary before
      comparison.
    - The primary flag of a key never reverts: a primary package that loses
      on date still flags the stored entry, and a later secondary winner
      inherits the flag.
    - resolve_versions() always processes secondary feeds first and the
      primary feed last.

Example:
    Resolve the Crowd feeds:
        ```python
        from crowdbump.feeds import resolve_versions

        versions = resolve_versions(
            "https://my.atlassian.com/download/feeds/current/crowd.json",
            [
                "https://my.atlassian.com/download/feeds/archived/crowd.json",
                "https://my.atlassian.com/download/feeds/eap/crowd.json",
            ],
        )
        print(versions["4.3"].archive_url)
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import replace

from crowdbump.logging import Logger, get_global_logger

from .filters import filter_packages
from .models import Package
from .parser import fetch_feed

FeedFetcher = Callable[[str], list[Package]]


def _pick(existing: Package | None, candidate: Package) -> Package:
    if existing is None:
        return candidate
    winner = candidate if candidate.released >= existing.released else existing
    is_primary = existing.is_primary or candidate.is_primary
    if winner.is_primary != is_primary:
        winner = replace(winner, is_primary=is_primary)
    return winner


def merge_packages(
    accumulator: Mapping[str, Package],
    packages: Iterable[Package],
    *,
    primary: bool = False,
) -> dict[str, Package]:
    """Fold packages into a version-key mapping.

    The accumulator is not modified; a new mapping is returned.

    Args:
        accumulator: Current key -> package mapping.
        packages: Installable packages from one feed.
        primary: True if the packages come from the primary feed.

    Returns:
        The updated mapping.
    """
    merged = dict(accumulator)
    for package in packages:
        if primary and not package.is_primary:
            package = replace(package, is_primary=True)
        key = package.version_key
        merged[key] = _pick(merged.get(key), package)
    return merged


def resolve_versions(
    primary_url: str,
    secondary_urls: Sequence[str] = (),
    *,
    fetch: FeedFetcher = fetch_feed,
    logger: Logger | None = None,
) -> dict[str, Package]:
    """Resolve the latest installable package for every version key.

    Args:
        primary_url: URL of the current-releases feed.
        secondary_urls: URLs of the other feeds (archive, EAP).
        fetch: Callable returning the packages of a feed URL.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        Mapping of version key to its single resolved package, covering
        every key seen in any feed.

    Raises:
        FeedFetchError: If any feed cannot be fetched.
        FeedFormatError: If any feed cannot be parsed.
    """
    if logger is None:
        logger = get_global_logger()

    versions: dict[str, Package] = {}
    feeds = [(url, False) for url in secondary_urls] + [(primary_url, True)]
    for url, is_primary in feeds:
        candidates = filter_packages(fetch(url))
        logger.verbose(
            "SELECT",
            f"{len(candidates)} installable archive(s) in {url}"
            + (" (primary)" if is_primary else ""),
        )
        versions = merge_packages(versions, candidates, primary=is_primary)

    for key in sorted(versions):
        pkg = versions[key]
        logger.debug(
            "SELECT",
            f"{key} -> {pkg.version} ({pkg.released.isoformat()})"
            + (" [latest]" if pkg.is_primary else ""),
        )
    return versions
