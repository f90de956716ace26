"""
Configuration model and loading.

This module provides the Pydantic model for codevault configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .env import load_layered_env
from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import VaultConfig, default_data_file

__all__ = [
    "VaultConfig",
    "clear_cache",
    "default_data_file",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
