"""
Helper utilities for the drawer search core.

Settings are read from a TOML file and merged over built-in defaults:

    [search]
    max_results = 8
    show_recent_apps = true
    max_recent_apps = 5
    hidden_apps = []

    [web_search]
    engine = "google"

    [providers.contacts]
    enabled = false

    [prefixes]
    web = ["s", "?"]
    files = ["f", "م"]
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

from ..search.registry import PrefixConfiguration

DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "drawer" / "settings.toml"

DEFAULTS: Dict[str, Any] = {
    "search": {
        "max_results": 8,
        "show_recent_apps": True,
        "max_recent_apps": 5,
        "hidden_apps": [],
    },
    "web_search": {
        "engine": "google",
        "max_engines": 2,
    },
    "providers": {
        "web": {"enabled": True},
        "contacts": {"enabled": True},
        "youtube": {"enabled": True},
        "files": {"enabled": True},
    },
    "prefixes": {},
    "recents": {
        "db_path": "",
    },
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a TOML file.

    Args:
        path: Settings file; defaults to ~/.config/drawer/settings.toml

    Returns:
        Dictionary containing settings with defaults applied. A missing
        or unreadable file yields the defaults.
    """
    defaults = copy.deepcopy(DEFAULTS)
    settings_path = Path(path) if path else DEFAULT_SETTINGS_PATH

    if not settings_path.exists():
        logger.info(f"Settings file not found at {settings_path}, using defaults")
        return defaults

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_prefix_configuration(settings: Dict[str, Any]) -> PrefixConfiguration:
    """
    Build a PrefixConfiguration from the [prefixes] section.

    A bare string is accepted as a single prefix. Entries of any other
    shape are skipped with a warning, so that provider keeps its default.
    """
    section = settings.get("prefixes", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring malformed [prefixes] section: expected a table")
        return PrefixConfiguration()

    prefixes = {}
    for provider_id, value in section.items():
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
            logger.warning(f"Skipping malformed prefixes for '{provider_id}': expected a list of strings")
            continue
        prefixes[provider_id] = value

    return PrefixConfiguration(prefixes)


def is_provider_enabled(settings: Dict[str, Any], provider_id: str) -> bool:
    section = settings.get("providers", {}).get(provider_id, {})
    if not isinstance(section, dict):
        return True
    return bool(section.get("enabled", True))
