"""Terminal control helpers for the viewer session.

Owns the raw-mode lifecycle: captures the original line-discipline settings,
applies a non-canonical configuration with a bounded read timeout, and
guarantees the snapshot is put back exactly once on every exit path.
"""

from __future__ import annotations

import atexit
import contextlib
import logging
import os
import termios
import tty
from dataclasses import dataclass

from .errors import TerminalConfigError

logger = logging.getLogger(__name__)

CLEAR_SCREEN = b"\x1b[2J"
CURSOR_HOME = b"\x1b[H"
DEFAULT_READ_TIMEOUT_TENTHS = 1


@dataclass(frozen=True)
class TerminalMode:
    """Opaque snapshot of ``termios.tcgetattr`` output."""

    attributes: tuple

    @classmethod
    def capture(cls, fd: int) -> TerminalMode:
        try:
            attrs = termios.tcgetattr(fd)
        except termios.error as exc:
            raise TerminalConfigError(f"tcgetattr: {exc}") from exc
        # cc is the only nested list; freeze a private copy of it.
        frozen = list(attrs)
        frozen[tty.CC] = tuple(attrs[tty.CC])
        return cls(tuple(frozen))

    def as_list(self) -> list:
        """Return a fresh mutable attribute list suitable for ``tcsetattr``."""
        attrs = list(self.attributes)
        attrs[tty.CC] = list(self.attributes[tty.CC])
        return attrs


def raw_attributes(mode: TerminalMode, read_timeout_tenths: int) -> list:
    """Derive raw-mode attributes from a captured snapshot.

    Disables break/CR translation, parity checks, 8th-bit stripping and flow
    control on input, all output post-processing, and echo, canonical mode,
    extended input and signal keys locally. Reads return after
    ``read_timeout_tenths`` tenths of a second with no data.
    """
    attrs = mode.as_list()
    attrs[tty.IFLAG] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
    attrs[tty.OFLAG] &= ~termios.OPOST
    attrs[tty.CFLAG] |= termios.CS8
    attrs[tty.LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
    attrs[tty.CC][termios.VMIN] = 0
    attrs[tty.CC][termios.VTIME] = max(1, min(255, int(read_timeout_tenths)))
    return attrs


def clear_screen(stdout_fd: int) -> None:
    """Clear the display and park the cursor at the top-left corner."""
    os.write(stdout_fd, CLEAR_SCREEN + CURSOR_HOME)


class TerminalController:
    """Manage the raw-mode transition for one stdin/stdout pair."""

    def __init__(
        self,
        stdin_fd: int,
        stdout_fd: int,
        read_timeout_tenths: int = DEFAULT_READ_TIMEOUT_TENTHS,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.read_timeout_tenths = read_timeout_tenths
        self._saved_mode: TerminalMode | None = None
        self._restored = False

    @property
    def saved_mode(self) -> TerminalMode | None:
        return self._saved_mode

    @property
    def is_raw(self) -> bool:
        return self._saved_mode is not None and not self._restored

    def enter(self) -> None:
        """Capture the current mode and switch the terminal to raw mode.

        The snapshot is taken only once per controller. ``restore`` is
        registered with ``atexit`` before any mutation so even an abrupt
        interpreter shutdown puts the terminal back.
        """
        if self._saved_mode is not None:
            raise TerminalConfigError("raw mode already entered")
        self._saved_mode = TerminalMode.capture(self.stdin_fd)
        atexit.register(self.restore)
        try:
            termios.tcsetattr(
                self.stdin_fd,
                termios.TCSAFLUSH,
                raw_attributes(self._saved_mode, self.read_timeout_tenths),
            )
        except termios.error as exc:
            raise TerminalConfigError(f"tcsetattr: {exc}") from exc
        logger.debug("raw mode enabled on fd %d (VTIME=%d)", self.stdin_fd, self.read_timeout_tenths)

    def restore(self) -> None:
        """Reapply the captured snapshot. Later calls are no-ops."""
        if self._saved_mode is None or self._restored:
            return
        self._restored = True
        atexit.unregister(self.restore)
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_mode.as_list())
        except termios.error as exc:
            raise TerminalConfigError(f"tcsetattr: {exc}") from exc
        logger.debug("terminal mode restored on fd %d", self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with enter/restore calls."""
        try:
            self.enter()
            yield self
        finally:
            self.restore()
