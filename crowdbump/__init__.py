"""
crowdbump - keep versioned Docker build directories on the latest patch release

crowdbump maintains a tree of per-version container build directories for an
Atlassian server product (Crowd by default). Each directory is named after a
"major.minor" release line; crowdbump reads Atlassian's download feeds, finds
the newest tar.gz release of every line and regenerates each directory's
Dockerfile and docker-entrypoint.sh to reference it.

crowdbump provides:
  - JSONP release feed parsing (current, archived and EAP feeds)
  - Filtering of WAR, cluster and non-standalone enterprise archives
  - Latest-release selection per "major.minor" line
  - Dockerfile generation from a template at the build root
  - Optional YAML configuration for other products or feeds

Quick Start
-----------
From a build root containing Dockerfile.tmpl, docker-entrypoint.sh and one
directory per version line (4.2/, 4.3/, ...):

    $ crowdbump update

Preview what would be written:

    $ crowdbump resolve

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level orchestration functions.
config : package
    Built-in defaults and YAML configuration loading.
feeds : package
    Feed download, parsing, filtering and latest-release selection.
versioning : package
    "major.minor" version keys.
build : package
    Build directory listing and artifact generation.

Public API
----------
    from crowdbump.core import update_build_dirs, resolve_build_dirs
    from crowdbump.feeds import resolve_versions
    from crowdbump.versioning import major_minor

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Keep versioned Docker build directories on the latest release"

# Re-export commonly used functions for convenience
from crowdbump.core import resolve_build_dirs, update_build_dirs
from crowdbump.feeds import Package, resolve_versions
from crowdbump.versioning import major_minor

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "Package",
    "major_minor",
    "resolve_build_dirs",
    "resolve_versions",
    "update_build_dirs",
]
