"""Persistent JSON config helpers.

Stores viewer preferences and jump-mode settings.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..jump import JumpConfig

logger = logging.getLogger(__name__)

APP_NAME = "hopview"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / "hopview.json"
CONFIG_PATH = DEFAULT_CONFIG_PATH


def _load_config_path() -> Path:
    """Return preferred config path, falling back to legacy location when needed."""
    if CONFIG_PATH.exists():
        return CONFIG_PATH
    if CONFIG_PATH == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = _load_config_path()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks the pager.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save config %s: %s", CONFIG_PATH, exc)


def load_wrap_text() -> bool:
    """Return persisted wrap preference; only explicit booleans are honored."""
    value = load_config().get("wrap_text")
    return value if isinstance(value, bool) else False


def save_wrap_text(wrap_text: bool) -> None:
    config = load_config()
    config["wrap_text"] = bool(wrap_text)
    save_config(config)


def load_theme_name() -> str | None:
    value = load_config().get("theme")
    return value if isinstance(value, str) and value.strip() else None


def load_jump_config() -> JumpConfig:
    """Return jump settings from ``jump_labels``/``jump_max_depth`` keys."""
    return JumpConfig.from_mapping(load_config())
