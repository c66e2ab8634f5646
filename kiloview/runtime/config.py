"""Persistent JSON config helpers.

Stores the raw-mode read timeout, the quit key, and the log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "kiloview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_READ_TIMEOUT_TENTHS = 1
DEFAULT_QUIT_KEY = "q"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class ViewerConfig:
    read_timeout_tenths: int = DEFAULT_READ_TIMEOUT_TENTHS
    quit_key: str = DEFAULT_QUIT_KEY
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def read_timeout_ms(self) -> int:
        return self.read_timeout_tenths * 100


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


def _coerce_read_timeout(value: object) -> int:
    """VTIME is a single byte of tenths; booleans and non-integers are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_READ_TIMEOUT_TENTHS
    if value < 1 or value > 255:
        return DEFAULT_READ_TIMEOUT_TENTHS
    return value


def _coerce_quit_key(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_QUIT_KEY
    stripped = value.strip().lower()
    if len(stripped) != 1 or not ("a" <= stripped <= "z"):
        return DEFAULT_QUIT_KEY
    return stripped


def coerce_log_level(value: object) -> str:
    """Normalize a level name, falling back to ``WARNING`` for unknown names."""
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name


def load_viewer_config() -> ViewerConfig:
    data = load_config()
    return ViewerConfig(
        read_timeout_tenths=_coerce_read_timeout(data.get("read_timeout_tenths")),
        quit_key=_coerce_quit_key(data.get("quit_key")),
        log_level=coerce_log_level(data.get("log_level")),
    )
