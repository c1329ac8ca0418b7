"""Persistent JSON config helpers.

Stores the preferred UI theme and defaults for ``--depth`` and ``--all``.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "statustree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only config directory never
    breaks a run.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist the default UI theme, keeping the other keys."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_default_depth() -> int:
    """Return the persisted default ``--depth``.

    Booleans, non-integers and negative values fall back to ``0``.
    """
    value = load_config().get("depth")
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def load_include_ignored() -> bool:
    """Return the persisted default for ``--all``; only real booleans count."""
    value = load_config().get("all")
    return bool(value) if isinstance(value, bool) else False


__all__ = [
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_theme_name",
    "save_theme_name",
    "load_default_depth",
    "load_include_ignored",
]
