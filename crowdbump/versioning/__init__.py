"""
Version key utilities for crowdbump.

Release feeds publish free-form version strings ("4.3.1", "4.3.1-standalone",
"5.0.0-m1"). Build directories are named after the "major.minor" line they
track ("4.3"). This package maps the former onto the latter.

Public API
----------
major_minor : function
    Derive the "major.minor" key of a raw version string.
FALLBACK_KEY : str
    Key returned for strings without a minor component ("0.0").

Examples
--------
    >>> from crowdbump.versioning import major_minor
    >>> major_minor("4.3.2")
    '4.3'
"""

from .keys import FALLBACK_KEY, major_minor

__all__ = ["FALLBACK_KEY", "major_minor"]
