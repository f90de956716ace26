"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import VaultConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per session
_config_cache: VaultConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/codevault/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "codevault" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .codevault.json in that directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".codevault.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 30}})
        {'a': 1, 'b': {'x': 10, 'y': 30}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top-level value is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config loading is resilient; the snippet store is not
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def _env_flag(value: str) -> bool:
    return value.lower() not in ("false", "0", "no", "")


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        CODEVAULT_DATA_FILE - overrides data_file
        CODEVAULT_EXPORT_DIR - overrides export_dir
        CODEVAULT_THEME - overrides theme
        CODEVAULT_CONFIRM_BATCH - overrides confirm_batch

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if data_file := os.environ.get("CODEVAULT_DATA_FILE"):
        result["data_file"] = data_file

    if export_dir := os.environ.get("CODEVAULT_EXPORT_DIR"):
        result["export_dir"] = export_dir

    if theme := os.environ.get("CODEVAULT_THEME"):
        result["theme"] = theme

    confirm = os.environ.get("CODEVAULT_CONFIRM_BATCH")
    if confirm is not None:
        result["confirm_batch"] = _env_flag(confirm)

    return result


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> VaultConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (CODEVAULT_*)
        2. Project config (.codevault.json)
        3. User config (~/.config/codevault/config.json)
        4. Model defaults

    Args:
        project_dir: Directory to load .codevault.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated VaultConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = VaultConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
