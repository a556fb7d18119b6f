"""
Pytest configuration and shared fixtures for crowdbump tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

CURRENT_URL = "https://feeds.example.com/current/crowd.json"
ARCHIVE_URL = "https://feeds.example.com/archived/crowd.json"
EAP_URL = "https://feeds.example.com/eap/crowd.json"

DOWNLOADS = "https://product-downloads.atlassian.com/software/crowd/downloads"


def feed_record(filename: str, version: str, released: str, **extra: Any) -> dict:
    """Build one feed record the way Atlassian publishes it."""
    record = {
        "description": f"Crowd {version}",
        "edition": "None",
        "zipUrl": f"{DOWNLOADS}/{filename}",
        "version": version,
        "released": released,
        "platform": "Unix",
    }
    record.update(extra)
    return record


def jsonp(records: list[dict], callback: str = "downloads") -> str:
    """Wrap records in a JSONP callback."""
    return f"{callback}({json.dumps(records)})"


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def current_records() -> list[dict]:
    """Records of the current (primary) feed."""
    return [
        feed_record("atlassian-crowd-4.3.2.tar.gz", "4.3.2", "01-Mar-2021"),
        feed_record("atlassian-crowd-4.3.2.zip", "4.3.2", "01-Mar-2021"),
        feed_record("atlassian-crowd-4.3.2-war.tar.gz", "4.3.2", "01-Mar-2021"),
        feed_record("atlassian-crowd-4.3.2-x64.exe", "4.3.2", "01-Mar-2021"),
    ]


@pytest.fixture
def archive_records() -> list[dict]:
    """Records of the archive feed."""
    return [
        feed_record("atlassian-crowd-4.3.1.tar.gz", "4.3.1", "10-Jan-2021"),
        feed_record("atlassian-crowd-4.2.3.tar.gz", "4.2.3", "05-Nov-2020"),
        feed_record("atlassian-crowd-4.2.2.tar.gz", "4.2.2", "01-Oct-2020"),
        feed_record("atlassian-crowd-4.2.3-cluster.tar.gz", "4.2.3", "06-Nov-2020"),
        feed_record(
            "atlassian-crowd-4.2.3-enterprise.tar.gz", "4.2.3", "07-Nov-2020"
        ),
    ]


@pytest.fixture
def eap_records() -> list[dict]:
    """Records of the early-access feed."""
    return [
        feed_record("atlassian-crowd-5.0.0-m1.tar.gz", "5.0.0-m1", "15-Feb-2021"),
    ]


@pytest.fixture
def mock_feeds(requests_mock, current_records, archive_records, eap_records):
    """Register the three feeds on requests_mock and return their URLs."""
    requests_mock.get(CURRENT_URL, text=jsonp(current_records))
    requests_mock.get(ARCHIVE_URL, text=jsonp(archive_records))
    requests_mock.get(EAP_URL, text=jsonp(eap_records))
    return {"primary": CURRENT_URL, "secondary": [ARCHIVE_URL, EAP_URL]}


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("crowdbump.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def build_root(tmp_test_dir: Path, create_yaml_file) -> Path:
    """
    Provide a build root with template, entrypoint, config and version dirs.

    The config points at the test feed URLs.
    """
    (tmp_test_dir / "Dockerfile.tmpl").write_text(
        'FROM base\nENV CROWD_HOME=/data\nRUN curl -fsSL "${zip_url}" | tar -xz\n'
        'LABEL version="${version}" line="${version_key}" '
        'released="${released}" latest="${latest}"\n',
        encoding="utf-8",
    )
    (tmp_test_dir / "docker-entrypoint.sh").write_text(
        '#!/bin/bash\nset -e\nexec "$@"\n', encoding="utf-8"
    )
    create_yaml_file(
        "crowdbump.yaml",
        {"feeds": {"primary": CURRENT_URL, "secondary": [ARCHIVE_URL, EAP_URL]}},
    )
    for name in ("4.2", "4.3"):
        (tmp_test_dir / name).mkdir()
    (tmp_test_dir / ".git").mkdir()
    return tmp_test_dir
