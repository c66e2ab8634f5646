"""Fatal error taxonomy for the viewer.

Components raise these; only the top-level runtime handler catches them.
Malformed escape sequences are not represented here: the key decoder
absorbs them and reports a plain ESC key instead.
"""

from __future__ import annotations


class KiloviewError(Exception):
    """Base class for unrecoverable viewer failures."""


class TerminalConfigError(KiloviewError):
    """Reading or applying terminal line-discipline settings failed."""


class GeometryQueryError(KiloviewError):
    """Neither the size ioctl nor the cursor-position probe produced a size."""


class InputReadError(KiloviewError):
    """Reading keyboard input failed for a reason other than a timeout."""


class SourceOpenError(KiloviewError):
    """The file to view could not be opened or read."""

    def __init__(self, path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
