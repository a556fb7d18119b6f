"""
Tests for crowdbump.versioning module.

Tests version key derivation including:
- Dot and hyphen separators
- Fallback key for malformed input
- Idempotence on derived keys
"""

from __future__ import annotations

import pytest

from crowdbump.versioning import FALLBACK_KEY, major_minor


class TestMajorMinor:
    """Tests for major_minor key derivation."""

    def test_patch_release(self):
        """Test that the patch component is dropped."""
        assert major_minor("4.3.1") == "4.3"

    def test_qualified_release(self):
        """Test that qualifiers after the patch are dropped."""
        assert major_minor("4.3.1-standalone") == "4.3"

    def test_hyphen_separator(self):
        """Test that a hyphen separates components too."""
        assert major_minor("5-0-1") == "5.0"
        assert major_minor("5.0-m1") == "5.0"

    def test_single_component_falls_back(self):
        """Test that a version without a minor part maps to 0.0."""
        assert major_minor("5") == FALLBACK_KEY == "0.0"

    def test_empty_string_falls_back(self):
        """Test that the empty string maps to 0.0."""
        assert major_minor("") == "0.0"

    def test_patch_releases_collapse(self):
        """Test that patch releases of one line share a key."""
        assert major_minor("4.3.1") == major_minor("4.3.2")

    @pytest.mark.parametrize(
        "version", ["4.3.1", "4.3.1-standalone", "10.12", "5.0.0-m1", "3-1"]
    )
    def test_idempotent(self, version):
        """Test that re-applying to a derived key returns it unchanged."""
        key = major_minor(version)
        assert major_minor(key) == key

    @pytest.mark.parametrize("version", ["", "5", "abc", "4.3.1", "..", "1.2.3.4.5"])
    def test_always_two_parts(self, version):
        """Test that every result has exactly one dot."""
        assert major_minor(version).count(".") == 1
