"""
Configuration loading and merging for crowdbump.

crowdbump runs with no configuration at all: the built-in defaults describe
the Atlassian Crowd feeds and the usual build root layout. A YAML file can
override any part of them.

Configuration Layers
--------------------
1. **Built-in defaults** (DEFAULT_CONFIG)
   - Crowd current/archived/EAP feeds
   - Dockerfile.tmpl and docker-entrypoint.sh at the build root
   - Output modes 0644 (Dockerfile) and 0764 (entrypoint)

2. **Config file** (crowdbump.yaml at the build root, or --config)
   - Optional when looked up at the root; required when passed explicitly
   - Overrides the defaults

Merge Behavior
--------------
The loader performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

So a config that lists ``feeds.secondary`` replaces the whole default list.

Path Resolution
---------------
Relative paths are resolved against the BUILD ROOT, not the working
directory. Currently resolved paths:
  - build.template
  - build.entrypoint

Example config
--------------
    feeds:
      primary: https://my.atlassian.com/download/feeds/current/jira-software.json
      secondary:
        - https://my.atlassian.com/download/feeds/archived/jira-software.json
    build:
      entrypoint_mode: "0755"
    http:
      timeout: 60

Error Handling
--------------
- ConfigError: Explicit config file missing, YAML parse errors, empty or
  non-mapping files, invalid field values
- All errors are chained with "from err" for better debugging

Examples
--------
    >>> from pathlib import Path
    >>> from crowdbump.config import load_config
    >>> cfg = load_config(Path("."))
    >>> cfg["feeds"]["primary"]
    'https://my.atlassian.com/download/feeds/current/crowd.json'
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from crowdbump.exceptions import ConfigError

CONFIG_FILENAME = "crowdbump.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "feeds": {
        "primary": "https://my.atlassian.com/download/feeds/current/crowd.json",
        "secondary": [
            "https://my.atlassian.com/download/feeds/archived/crowd.json",
            "https://my.atlassian.com/download/feeds/eap/crowd.json",
        ],
    },
    "build": {
        "template": "Dockerfile.tmpl",
        "output": "Dockerfile",
        "output_mode": "0644",
        "entrypoint": "docker-entrypoint.sh",
        "entrypoint_mode": "0764",
    },
    "http": {
        "timeout": None,
        "user_agent": None,
    },
}

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """
    Load a YAML file and return the parsed Python object.

    Raises:
      ConfigError - when the file does not exist, is not valid YAML, or is empty
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Validation
# -------------------------------


def parse_mode(value: Any, field: str) -> int:
    """
    Convert a permission mode to an int.

    Accepts octal strings ("0764", "764", "0o764") and plain ints (as YAML
    1.1 reads an unquoted 0764). Ints above 0o777 are rejected: an unquoted
    764 is read as decimal, and special bits must be spelled as a string.
    """
    if isinstance(value, bool):
        raise ConfigError(f"{field} must be an octal string, got {value!r}")
    if isinstance(value, int):
        if value > 0o777:
            raise ConfigError(
                f"{field} must be a quoted octal string (e.g. \"0764\"), "
                f"got the decimal number {value!r}"
            )
        mode = value
    elif isinstance(value, str):
        text = value.strip().lower().removeprefix("0o")
        try:
            mode = int(text, 8)
        except ValueError as err:
            raise ConfigError(
                f"{field} must be an octal string, got {value!r}"
            ) from err
    else:
        raise ConfigError(f"{field} must be an octal string, got {value!r}")
    if not 0 <= mode <= 0o7777:
        raise ConfigError(f"{field} out of range: {value!r}")
    return mode


def _validate(cfg: dict[str, Any]) -> None:
    """Check field types and normalize modes in place."""
    feeds = cfg.get("feeds")
    if not isinstance(feeds, dict):
        raise ConfigError("feeds must be a mapping")

    primary = feeds.get("primary")
    if not isinstance(primary, str) or not primary.strip():
        raise ConfigError("feeds.primary must be a non-empty string")

    secondary = feeds.get("secondary")
    if secondary is None:
        feeds["secondary"] = []
    elif not isinstance(secondary, list) or not all(
        isinstance(u, str) and u.strip() for u in secondary
    ):
        raise ConfigError("feeds.secondary must be a list of URLs")

    build = cfg.get("build")
    if not isinstance(build, dict):
        raise ConfigError("build must be a mapping")
    for key in ("template", "output", "entrypoint"):
        if not isinstance(build.get(key), str) or not build[key].strip():
            raise ConfigError(f"build.{key} must be a non-empty string")
    build["output_mode"] = parse_mode(build.get("output_mode"), "build.output_mode")
    build["entrypoint_mode"] = parse_mode(
        build.get("entrypoint_mode"), "build.entrypoint_mode"
    )

    http = cfg.get("http")
    if not isinstance(http, dict):
        raise ConfigError("http must be a mapping")
    timeout = http.get("timeout")
    if timeout is not None and (
        isinstance(timeout, bool)
        or not isinstance(timeout, (int, float))
        or timeout <= 0
    ):
        raise ConfigError(f"http.timeout must be a positive number, got {timeout!r}")


# -------------------------------
# Path resolution
# -------------------------------


def _resolve_known_paths(cfg: dict[str, Any], root: Path) -> None:
    """
    Resolve build.template and build.entrypoint against the build root.

    Modifies cfg in place.
    """
    build = cfg["build"]
    for key in ("template", "entrypoint"):
        p = Path(build[key])
        if not p.is_absolute():
            build[key] = str((root / p).resolve())


# -------------------------------
# Public API
# -------------------------------


def load_config(root: Path, config_path: Path | None = None) -> dict[str, Any]:
    """
    Load the effective configuration for a build root.

    Steps
      1) Start from a copy of DEFAULT_CONFIG.
      2) Pick the config file: config_path if given (must exist), else
         <root>/crowdbump.yaml if present, else none.
      3) Deep-merge the file on top of the defaults.
      4) Validate fields and convert permission modes to ints.
      5) Resolve template/entrypoint paths against the root.

    Returns
      A merged configuration dict.

    Raises
      ConfigError on a missing explicit file, YAML errors, or invalid values.
    """
    from crowdbump.logging import get_global_logger

    logger = get_global_logger()
    root = Path(root).resolve()
    merged = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        candidate = root / CONFIG_FILENAME
        config_path = candidate if candidate.exists() else None

    if config_path is not None:
        config_path = Path(config_path)
        logger.verbose("CONFIG", f"Loading: {config_path}")
        overlay = _load_yaml_file(config_path)
        if not isinstance(overlay, dict):
            raise ConfigError(
                f"top-level YAML must be a mapping (dict): {config_path}"
            )
        merged = _deep_merge_dicts(merged, overlay)
    else:
        logger.verbose("CONFIG", "No config file, using built-in defaults")

    _validate(merged)
    _resolve_known_paths(merged, root)

    logger.debug("CONFIG", f"Primary feed: {merged['feeds']['primary']}")
    for url in merged["feeds"]["secondary"]:
        logger.debug("CONFIG", f"Secondary feed: {url}")
    return merged
