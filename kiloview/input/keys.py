"""Logical key events produced by the decoder."""

from __future__ import annotations

from enum import Enum
from typing import Union

ESC_BYTE = 0x1B


class Key(str, Enum):
    """Navigation keys decoded from multi-byte escape sequences."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    PAGE_UP = "PAGE_UP"
    PAGE_DOWN = "PAGE_DOWN"
    HOME = "HOME"
    END = "END"
    DELETE = "DELETE"
    ESC = "ESC"


# A literal input byte is passed through as an ``int`` in ``0..255``.
KeyEvent = Union[Key, int]

ARROW_KEYS = frozenset({Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT})


def ctrl_key(ch: str) -> int:
    """Return the byte a terminal sends for Ctrl+``ch``.

    Ctrl clears bits 5 and 6 of the pressed key, so ``q`` (0x71) becomes 0x11.
    """
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    return ord(ch) & 0x1F


def describe_key(event: KeyEvent) -> str:
    """Human-readable label used in log lines."""
    if isinstance(event, Key):
        return event.value
    if 0x20 <= event < 0x7F:
        return repr(chr(event))
    return f"0x{event:02x}"
