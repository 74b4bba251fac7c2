"""
Configuration models and loading.

RinkuConfig is resolved with multi-layer merging:
defaults < user < project < env vars.
"""

from .loader import (
    clear_cache,
    deep_merge,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
    load_env_files,
)
from .models import RinkuConfig

__all__ = [
    "RinkuConfig",
    "clear_cache",
    "deep_merge",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_env_files",
]
