"""Input-layer public API for key decoding.

Exports the key vocabulary and the byte-stream decoder used by the
runtime loop.
"""

from .keys import ARROW_KEYS, ESC_BYTE, Key, KeyEvent, ctrl_key, describe_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, KeyDecoder

__all__ = [
    "ARROW_KEYS",
    "ESC_BYTE",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Key",
    "KeyDecoder",
    "KeyEvent",
    "ctrl_key",
    "describe_key",
]
