"""Low-level terminal input decoding.

Reads raw bytes from a file descriptor and turns them into one logical key
per call. Escape sequences are resolved with bounded lookahead: every byte
after the initial ESC is awaited for at most the read timeout, so a lone Esc
press never blocks waiting for bytes that will not arrive.
"""

from __future__ import annotations

import errno
import logging
import os
import select

from ..errors import InputReadError
from .keys import ESC_BYTE, Key, KeyEvent

logger = logging.getLogger(__name__)

ESC_SEQUENCE_TIMEOUT_MS = 100

_CSI_LETTER_KEYS: dict[bytes, Key] = {
    b"A": Key.UP,
    b"B": Key.DOWN,
    b"C": Key.RIGHT,
    b"D": Key.LEFT,
    b"H": Key.HOME,
    b"F": Key.END,
}
_SS3_LETTER_KEYS: dict[bytes, Key] = {
    b"H": Key.HOME,
    b"F": Key.END,
}
_TILDE_DIGIT_KEYS: dict[bytes, Key] = {
    b"1": Key.HOME,
    b"3": Key.DELETE,
    b"4": Key.END,
    b"5": Key.PAGE_UP,
    b"6": Key.PAGE_DOWN,
    b"7": Key.HOME,
    b"8": Key.END,
}


class KeyDecoder:
    """Decode one key event per ``read_key`` call from ``fd``."""

    def __init__(self, fd: int, timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.fd = fd
        self.timeout_ms = timeout_ms

    def _read_ready_byte(self) -> bytes | None:
        """Return one byte, or ``None`` when nothing arrives within the timeout."""
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, self.timeout_ms / 1000.0))
            if not ready:
                return None
            ch = os.read(self.fd, 1)
        except OSError as exc:
            if exc.errno == errno.EAGAIN:
                return None
            raise InputReadError(f"read: {exc}") from exc
        if not ch:
            return None
        return ch

    def _read_first_byte(self) -> bytes:
        while True:
            try:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, self.timeout_ms / 1000.0))
                if not ready:
                    continue
                ch = os.read(self.fd, 1)
            except OSError as exc:
                if exc.errno == errno.EAGAIN:
                    continue
                raise InputReadError(f"read: {exc}") from exc
            if ch:
                return ch
            # Readable but empty means the other end is gone.
            raise InputReadError("read: end of input")

    def read_key(self) -> KeyEvent:
        """Block until a byte arrives and return the key it starts."""
        ch = self._read_first_byte()
        if ch[0] != ESC_BYTE:
            return ch[0]

        first = self._read_ready_byte()
        if first is None:
            return Key.ESC
        second = self._read_ready_byte()
        if second is None:
            return Key.ESC

        if first == b"[":
            if second.isdigit():
                third = self._read_ready_byte()
                if third is None:
                    return Key.ESC
                if third == b"~" and second in _TILDE_DIGIT_KEYS:
                    return _TILDE_DIGIT_KEYS[second]
                logger.debug("unrecognized escape sequence %r", b"\x1b[" + second + third)
                return Key.ESC
            key = _CSI_LETTER_KEYS.get(second)
        elif first == b"O":
            key = _SS3_LETTER_KEYS.get(second)
        else:
            key = None

        if key is None:
            logger.debug("unrecognized escape sequence %r", b"\x1b" + first + second)
            return Key.ESC
        return key
