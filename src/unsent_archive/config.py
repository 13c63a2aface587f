"""Configuration persistence: load and save user preferences and session."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from unsent_archive.models import (
    CONFIG_APP_NAME,
    SessionState,
    UserConfig,
)
from unsent_archive.services.loader import DEFAULT_DATA_DIR
from unsent_archive.storage import write_json_atomic
from unsent_archive.themes import THEMES

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field                  Rule                            Handler
#   ─────────────────────  ──────────────────────────────  ──────────────────
#   theme_name             key of THEMES                   _dict_to_config
#   session.category       in FILTER_CATEGORIES            SessionState
#   session.scroll_index   x ≥ 0                           SessionState
#   scalar fields          type-checked via _safe_get()    _dict_to_config
#
CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/unsent-archive/config.json
    - macOS: ~/Library/Application Support/unsent-archive/config.json
    - Windows: %APPDATA%/unsent-archive/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _config_to_dict(config: UserConfig) -> dict[str, Any]:
    """Serialize UserConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "data_source": config.data_source,
        "theme_name": config.theme_name,
        "show_excerpt_preview": config.show_excerpt_preview,
        "session": {
            "category": config.session.category,
            "query": config.session.query,
            "scroll_index": config.session.scroll_index,
        },
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        return default
    # bool is an int subclass; don't let true/false stand in for numbers
    if expected_type is int and isinstance(value, bool):
        return default
    return value


def _parse_session_state(data: dict[str, Any]) -> SessionState:
    raw = data.get("session", {})
    if not isinstance(raw, dict):
        return SessionState()
    return SessionState(
        category=_safe_get(raw, "category", "all", str),
        query=_safe_get(raw, "query", "", str),
        scroll_index=_safe_get(raw, "scroll_index", 0, int),
    )


def _dict_to_config(data: dict[str, Any]) -> UserConfig:
    """Deserialize a dictionary to UserConfig with type validation."""
    if not isinstance(data, dict):
        raise TypeError(f"config root must be an object, got {type(data).__name__}")
    theme_name = _safe_get(data, "theme_name", "monokai", str)
    if theme_name not in THEMES:
        logger.warning("Unknown theme %r in config, using monokai", theme_name)
        theme_name = "monokai"
    return UserConfig(
        data_source=_safe_get(data, "data_source", "", str),
        theme_name=theme_name,
        show_excerpt_preview=_safe_get(data, "show_excerpt_preview", True, bool),
        session=_parse_session_state(data),
        version=_safe_get(data, "version", 1, int),
    )


def load_config() -> UserConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return _dict_to_config(data)
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return UserConfig()
    except (KeyError, TypeError) as e:
        logger.warning("Config file has invalid structure, using defaults: %s", e)
        return UserConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return UserConfig()


def save_config(config: UserConfig) -> bool:
    """Save configuration to disk atomically.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = get_config_path()
    try:
        write_json_atomic(config_path, _config_to_dict(config), prefix=".config-")
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


def resolve_data_source(cli_source: str | None, config: UserConfig) -> str:
    """Pick the archive location: CLI flag, then config, then ./data."""
    if cli_source:
        return cli_source
    if config.data_source:
        return config.data_source
    return str(Path.cwd() / DEFAULT_DATA_DIR)


__all__ = [
    "CONFIG_FILENAME",
    "get_config_path",
    "load_config",
    "resolve_data_source",
    "save_config",
]
