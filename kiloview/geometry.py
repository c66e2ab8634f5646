"""Terminal size discovery.

Prefers the kernel's window-size ioctl. When that is unavailable or reports
zero columns, pushes the cursor to the bottom-right corner and asks the
terminal where it ended up with a device status report.
"""

from __future__ import annotations

import logging
import os
import re
import select
from dataclasses import dataclass

from .errors import GeometryQueryError

logger = logging.getLogger(__name__)

CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
DEVICE_STATUS_REPORT = b"\x1b[6n"
REPLY_MAX_BYTES = 31
REPLY_TIMEOUT_MS = 100

_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)\Z")


@dataclass(frozen=True)
class ScreenGeometry:
    rows: int
    cols: int


def parse_cursor_report(reply: bytes) -> ScreenGeometry:
    """Parse ``ESC [ rows ; cols`` (terminator already stripped)."""
    match = _CURSOR_REPORT_RE.match(reply)
    if match is None:
        raise GeometryQueryError(f"malformed cursor position report {reply!r}")
    rows, cols = int(match.group(1)), int(match.group(2))
    if rows <= 0 or cols <= 0:
        raise GeometryQueryError(f"cursor position report out of range {reply!r}")
    return ScreenGeometry(rows=rows, cols=cols)


def read_cursor_report(stdin_fd: int, timeout_ms: int = REPLY_TIMEOUT_MS) -> bytes:
    """Collect reply bytes up to (not including) ``R`` or the buffer bound."""
    reply = bytearray()
    while len(reply) < REPLY_MAX_BYTES:
        ready, _, _ = select.select([stdin_fd], [], [], timeout_ms / 1000.0)
        if not ready:
            break
        ch = os.read(stdin_fd, 1)
        if not ch or ch == b"R":
            break
        reply += ch
    return bytes(reply)


def probe_cursor_geometry(stdin_fd: int, stdout_fd: int, timeout_ms: int = REPLY_TIMEOUT_MS) -> ScreenGeometry:
    """Measure the screen by clipping the cursor against its edges."""
    try:
        probe = CURSOR_TO_BOTTOM_RIGHT + DEVICE_STATUS_REPORT
        if os.write(stdout_fd, probe) != len(probe):
            raise GeometryQueryError("short write while probing cursor position")
        reply = read_cursor_report(stdin_fd, timeout_ms)
    except OSError as exc:
        raise GeometryQueryError(f"cursor position probe: {exc}") from exc
    return parse_cursor_report(reply)


def query_geometry(stdin_fd: int, stdout_fd: int, timeout_ms: int = REPLY_TIMEOUT_MS) -> ScreenGeometry:
    """Return the visible terminal extent, or raise ``GeometryQueryError``."""
    try:
        size = os.get_terminal_size(stdout_fd)
    except OSError as exc:
        logger.info("window size ioctl failed (%s); probing cursor position", exc)
    else:
        if size.columns > 0 and size.lines > 0:
            geometry = ScreenGeometry(rows=size.lines, cols=size.columns)
            logger.debug("window size from ioctl: %s", geometry)
            return geometry
        logger.info("window size ioctl reported %dx%d; probing cursor position", size.lines, size.columns)

    geometry = probe_cursor_geometry(stdin_fd, stdout_fd, timeout_ms)
    logger.debug("window size from cursor probe: %s", geometry)
    return geometry
