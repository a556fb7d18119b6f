"""Dockerfile template rendering for crowdbump.

This module fills the Dockerfile template kept at the build root with the
values of a resolved package. The template uses ``string.Template``
placeholders; anything that is not a known placeholder (``$CROWD_HOME``,
``${JAVA_OPTS}``) is left untouched so ordinary Dockerfile variables can be
used freely.

Placeholders:
    - **${zip_url}**: Archive download URL.
    - **${version}**: Full version string (e.g., "4.3.2").
    - **${version_key}**: Build directory name (e.g., "4.3").
    - **${released}**: Release date in ISO form (e.g., "2021-03-01").
    - **${latest}**: "true" if the primary feed lists this line, else "false".

Private Helpers:
    - _format_template_value: Format Python values as template text

Example:
    from pathlib import Path
    from crowdbump.build.template import load_template, render_dockerfile

    template = load_template(Path("Dockerfile.tmpl"))
    text = render_dockerfile(template, package, "4.3")
    Path("4.3/Dockerfile").write_text(text)
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
import string
from typing import Any

from crowdbump.exceptions import ArtifactWriteError
from crowdbump.feeds.models import Package


def _format_template_value(value: Any) -> str:
    """Format a Python value as template text.

    Example:
        >>> _format_template_value(True)
        'true'
        >>> _format_template_value(date(2021, 3, 1))
        '2021-03-01'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, date):
        return value.isoformat()
    elif value is None:
        return ""
    return str(value)


def build_template_vars(package: Package, version_key: str) -> dict[str, str]:
    """Build the placeholder mapping for a package.

    Args:
        package: Resolved package for the directory.
        version_key: Name of the build directory.

    Returns:
        Placeholder name -> text mapping.
    """
    raw = {
        "zip_url": package.archive_url,
        "version": package.version,
        "version_key": version_key,
        "released": package.released,
        "latest": package.is_primary,
    }
    return {k: _format_template_value(v) for k, v in raw.items()}


def load_template(template_path: Path) -> str:
    """Read the Dockerfile template.

    Raises:
        ArtifactWriteError: If the template cannot be read.
    """
    try:
        return Path(template_path).read_text(encoding="utf-8")
    except OSError as err:
        raise ArtifactWriteError(
            f"error reading template {template_path}: {err}"
        ) from err


def render_dockerfile(template_text: str, package: Package, version_key: str) -> str:
    """Render the Dockerfile template for one package.

    Args:
        template_text: Template source.
        package: Resolved package for the directory.
        version_key: Name of the build directory.

    Returns:
        Rendered Dockerfile text.
    """
    return string.Template(template_text).safe_substitute(
        build_template_vars(package, version_key)
    )
