"""
Tests for crowdbump.core module.

Tests core orchestration including:
- Full update of a build root
- Resolve-only runs
- Abort on missing versions, broken feeds and missing templates
"""

from __future__ import annotations

from datetime import date
import stat

import pytest

from crowdbump.core import resolve_build_dirs, update_build_dirs
from crowdbump.exceptions import (
    ArtifactWriteError,
    DirectoryListError,
    FeedFetchError,
    FeedFormatError,
    MissingVersionError,
)
from crowdbump.feeds import Package

from .conftest import ARCHIVE_URL, CURRENT_URL, EAP_URL


class TestUpdateBuildDirs:
    """Tests for the update_build_dirs orchestration function."""

    def test_update_success(self, build_root, mock_feeds):
        """Test that every tracked directory is regenerated."""
        results = update_build_dirs(build_root)

        assert [r.version_key for r in results] == ["4.2", "4.3"]

        dockerfile_43 = (build_root / "4.3" / "Dockerfile").read_text()
        assert "atlassian-crowd-4.3.2.tar.gz" in dockerfile_43
        assert 'version="4.3.2" line="4.3"' in dockerfile_43
        assert 'released="2021-03-01" latest="true"' in dockerfile_43
        assert "ENV CROWD_HOME=/data" in dockerfile_43

        dockerfile_42 = (build_root / "4.2" / "Dockerfile").read_text()
        assert "atlassian-crowd-4.2.3.tar.gz" in dockerfile_42
        assert 'latest="false"' in dockerfile_42

        for name in ("4.2", "4.3"):
            entrypoint = build_root / name / "docker-entrypoint.sh"
            assert entrypoint.read_text().startswith("#!/bin/bash")
            assert stat.S_IMODE(entrypoint.stat().st_mode) == 0o764

    def test_hidden_directories_untouched(self, build_root, mock_feeds):
        """Test that dot-directories are not treated as versions."""
        update_build_dirs(build_root)

        assert not (build_root / ".git" / "Dockerfile").exists()

    def test_secondary_feeds_fetched_before_primary(
        self, build_root, mock_feeds, requests_mock
    ):
        """Test the feed request order."""
        update_build_dirs(build_root)

        urls = [r.url for r in requests_mock.request_history]
        assert urls == [ARCHIVE_URL, EAP_URL, CURRENT_URL]

    def test_missing_version_aborts(self, build_root, mock_feeds):
        """Test that an unknown tracked line aborts with its name."""
        (build_root / "9.9").mkdir()

        with pytest.raises(MissingVersionError, match="9.9") as exc_info:
            update_build_dirs(build_root)

        assert exc_info.value.version_key == "9.9"
        # directories before 9.9 were updated, nothing is rolled back
        assert (build_root / "4.2" / "Dockerfile").exists()
        assert (build_root / "4.3" / "Dockerfile").exists()

    def test_missing_version_stops_later_directories(self, build_root, mock_feeds):
        """Test that directories after the failing one are not touched."""
        (build_root / "4.0").mkdir()

        with pytest.raises(MissingVersionError, match="4.0"):
            update_build_dirs(build_root)

        assert not (build_root / "4.2" / "Dockerfile").exists()
        assert not (build_root / "4.3" / "Dockerfile").exists()

    def test_malformed_feed_aborts_before_writing(self, build_root, requests_mock):
        """Test that a broken feed stops the run before any directory."""
        requests_mock.get(ARCHIVE_URL, text="downloads([])")
        requests_mock.get(EAP_URL, text="<html>oops</html>")
        requests_mock.get(CURRENT_URL, text="downloads([])")

        with pytest.raises(FeedFormatError) as exc_info:
            update_build_dirs(build_root)

        assert exc_info.value.url == EAP_URL
        assert not (build_root / "4.2" / "Dockerfile").exists()
        assert not (build_root / "4.3" / "Dockerfile").exists()

    def test_unreachable_feed_aborts(self, build_root, requests_mock):
        """Test that an HTTP error on a feed is a fetch error."""
        requests_mock.get(ARCHIVE_URL, status_code=500)

        with pytest.raises(FeedFetchError, match="500"):
            update_build_dirs(build_root)

    def test_missing_template_aborts_before_fetching(self, build_root, requests_mock):
        """Test that a missing template fails before any request."""
        (build_root / "Dockerfile.tmpl").unlink()

        with pytest.raises(ArtifactWriteError, match="template"):
            update_build_dirs(build_root)

        assert requests_mock.call_count == 0

    def test_missing_entrypoint_aborts(self, build_root, requests_mock):
        """Test that a missing entrypoint source fails early."""
        (build_root / "docker-entrypoint.sh").unlink()

        with pytest.raises(ArtifactWriteError, match="entrypoint"):
            update_build_dirs(build_root)

        assert requests_mock.call_count == 0

    def test_missing_root_aborts(self, tmp_test_dir, create_yaml_file):
        """Test that an unreadable root is a listing error."""
        root = tmp_test_dir / "missing"
        (tmp_test_dir / "Dockerfile.tmpl").write_text("FROM x\n")
        (tmp_test_dir / "docker-entrypoint.sh").write_text("#!/bin/sh\n")
        config_path = create_yaml_file(
            "crowdbump.yaml",
            {
                "build": {
                    "template": str(tmp_test_dir / "Dockerfile.tmpl"),
                    "entrypoint": str(tmp_test_dir / "docker-entrypoint.sh"),
                }
            },
        )

        with pytest.raises(DirectoryListError):
            update_build_dirs(root, config_path=config_path)

    def test_injected_fetcher(self, build_root):
        """Test that a custom fetcher replaces HTTP access."""

        def fetch(url):
            if url != CURRENT_URL:
                return []
            return [
                Package("https://x/crowd-4.2.9.tar.gz", "4.2.9", date(2022, 1, 1)),
                Package("https://x/crowd-4.3.9.tar.gz", "4.3.9", date(2022, 1, 1)),
            ]

        results = update_build_dirs(build_root, fetch=fetch)

        assert [r.package.version for r in results] == ["4.2.9", "4.3.9"]
        assert all(r.package.is_primary for r in results)


class TestResolveBuildDirs:
    """Tests for the resolve-only orchestration function."""

    def test_resolve_success(self, build_root, mock_feeds):
        """Test that tracked directories map to their packages."""
        result = resolve_build_dirs(build_root)

        assert result.tracked == ["4.2", "4.3"]
        assert result.packages["4.3"].version == "4.3.2"
        assert result.packages["4.2"].version == "4.2.3"
        assert result.available == ["4.2", "4.3", "5.0"]

    def test_resolve_writes_nothing(self, build_root, mock_feeds):
        """Test that resolving leaves the directories untouched."""
        resolve_build_dirs(build_root)

        assert not (build_root / "4.3" / "Dockerfile").exists()

    def test_resolve_missing_version(self, build_root, mock_feeds):
        """Test that resolving reports unknown lines too."""
        (build_root / "9.9").mkdir()

        with pytest.raises(MissingVersionError, match="9.9"):
            resolve_build_dirs(build_root)
