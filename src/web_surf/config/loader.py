"""
Configuration loader with YAML file support and environment variable overrides.

Settings are layered, later sources winning:
1. Default values (defined in settings.py)
2. YAML configuration file
3. Environment variables

Environment variables use the pattern: WEB_SURF__{SECTION}__{KEY}
Example: WEB_SURF__BROWSER__FOLLOW_REDIRECTS=false

Malformed files and invalid values are reported as ConfigurationError.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from web_surf.config.settings import Settings
from web_surf.core.exceptions import ConfigurationError


ENV_PREFIX = "WEB_SURF"

_TRUE_WORDS = frozenset({"true", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "no", "off"})
_NULL_WORDS = frozenset({"none", "null", ""})


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries, with override taking precedence.

    Neither input is modified.

    Args:
        base: Base dictionary to merge into
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    merged = dict(base)

    for key, value in override.items():
        current = merged.get(key)
        # Sections merge key by key, anything else is replaced outright
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value

    return merged


def _parse_env_value(value: str) -> Any:
    """
    Turn an environment variable string into a Python value.

    "1" and "0" stay integers; pydantic coerces them where a field is a bool.

    Returns:
        bool, None, int, float, or the original string
    """
    word = value.strip().lower()

    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    if word in _NULL_WORDS:
        return None

    # Numbers: int first so "3" does not become 3.0
    for convert in (int, float):
        try:
            return convert(value)
        except ValueError:
            continue

    return value


def _set_nested(target: dict[str, Any], key_path: list[str], value: Any) -> None:
    """Store value in target under key_path, creating sections on the way."""
    *sections, leaf = key_path
    for section in sections:
        target = target.setdefault(section, {})
    target[leaf] = value


def _load_env_overrides(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """
    Collect configuration overrides from environment variables.

    Only variables with at least a section and a key are used, so
    WEB_SURF__BROWSER__SEND_REFERER=false counts and WEB_SURF__DEBUG does not.

    Args:
        prefix: Environment variable prefix to look for

    Returns:
        Nested dictionary of overrides
    """
    marker = f"{prefix}__"
    overrides: dict[str, Any] = {}

    for name in sorted(os.environ):
        if not name.startswith(marker):
            continue

        # SECTION__KEY becomes ["section", "key"]
        key_path = name[len(marker):].lower().split("__")
        if len(key_path) < 2 or not all(key_path):
            continue

        _set_nested(overrides, key_path, _parse_env_value(os.environ[name]))

    return overrides


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Read one YAML configuration file.

    An empty file counts as an empty mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the YAML is invalid or not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        details: dict[str, Any] = {"path": str(path)}
        # Scanner and parser errors carry the offending position
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            details["line"] = mark.line + 1
        raise ConfigurationError("Invalid YAML in configuration file", details=details) from e

    # Top level must be sections, not a list or scalar
    if content is None:
        return {}

    if not isinstance(content, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping, got: {type(content).__name__}",
            details={"path": str(path)},
        )

    return content


def load_config(
    config_path: Path | str | None = None,
    env_prefix: str = ENV_PREFIX,
) -> Settings:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to YAML configuration file. If None, uses defaults only.
        env_prefix: Prefix for environment variables

    Returns:
        Validated Settings instance

    Raises:
        FileNotFoundError: If config_path is specified but doesn't exist
        ConfigurationError: If the file is malformed or a value is invalid
    """
    source = str(config_path) if config_path is not None else "defaults"
    config_data: dict[str, Any] = {}

    # File values first, environment on top
    if config_path is not None:
        config_data = _load_yaml_file(Path(config_path))

    config_data = _deep_merge(config_data, _load_env_overrides(env_prefix))

    # Pydantic validates every section here
    try:
        return Settings(**config_data)
    except ValidationError as e:
        fields = [".".join(str(loc) for loc in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid configuration values: {', '.join(fields)}",
            details={"source": source, "errors": e.error_count()},
        ) from e


def get_default_config_path() -> Path | None:
    """
    Find the default configuration file path.

    Searches for config.yaml in:
    1. Current working directory
    2. ./config/
    3. User's home directory/.web_surf/

    Returns:
        Path to configuration file if found, None otherwise
    """
    candidates = (
        Path.cwd() / "config.yaml",
        Path.cwd() / "config" / "config.yaml",
        Path.home() / ".web_surf" / "config.yaml",
    )
    return next((path for path in candidates if path.is_file()), None)
