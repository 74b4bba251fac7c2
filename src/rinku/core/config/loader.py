"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars

Env vars may also come from .env files (see load_env_files).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from .models import RinkuConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per session
_config_cache: RinkuConfig | None = None


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
        Path to ~/.config/rinku/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "rinku" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Project directory (defaults to current directory)

    Returns:
        Path to .rinku.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".rinku.json"


def get_env_file_paths(project_dir: Path) -> list[Path]:
    """
    Get .env files in the order they are applied.

    Returns:
        User ~/.config/rinku/.env, then the project's .env and .env.local
    """
    return [
        get_xdg_config_home() / "rinku" / ".env",
        project_dir / ".env",
        project_dir / ".env.local",
    ]


def load_env_files(project_dir: Path) -> list[str]:
    """
    Export variables from .env files so RINKU_* overrides can live there.

    Later files win over earlier ones, but a variable already present in the
    process environment is never replaced.

    Args:
        project_dir: Project root holding .env and .env.local

    Returns:
        Sorted names of the variables that were exported
    """
    inherited = set(os.environ)
    values: dict[str, str] = {}

    for path in get_env_file_paths(project_dir):
        if not path.is_file():
            continue
        for key, value in dotenv_values(path).items():
            if value is not None:
                values[key] = value

    exported = sorted(key for key in values if key not in inherited)
    for key in exported:
        os.environ[key] = values[key]

    if exported:
        logger.debug("Loaded %s from .env files", ", ".join(exported))
    return exported


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested dicts
    are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 2}})
        {'a': 1, 'b': {'x': 10, 'y': 2}}
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
        Parsed JSON object, or None if the file is missing, unreadable, or
        not a JSON object
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        # Config system should be resilient to a broken file
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None

    if isinstance(data, dict):
        return data
    logger.warning("Ignoring config at %s: expected a JSON object", path)
    return None


def _parse_bool(value: str) -> bool:
    return value.lower() not in ("false", "0", "no", "")


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        RINKU_STATE_DIR - overrides state_dir
        RINKU_PROMPT - overrides prompt_path
        RINKU_TARGET_LANG - overrides target_language
        RINKU_UNSAFE - overrides include_unsafe

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if state_dir := os.environ.get("RINKU_STATE_DIR"):
        result["state_dir"] = state_dir

    if prompt := os.environ.get("RINKU_PROMPT"):
        result["prompt_path"] = prompt

    if target := os.environ.get("RINKU_TARGET_LANG"):
        result["target_language"] = target

    if (unsafe := os.environ.get("RINKU_UNSAFE")) is not None:
        result["include_unsafe"] = _parse_bool(unsafe)

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "state_dir": ".rinku",
        "prompt_path": None,
        "target_language": "rust",
        "include_unsafe": False,
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> RinkuConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (RINKU_*)
        2. Project config (.rinku.json)
        3. User config (~/.config/rinku/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .rinku.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated RinkuConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation

    Example:
        >>> config = load_config()
        >>> config.state_dir
        '.rinku'
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = RinkuConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
