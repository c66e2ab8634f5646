"""Frame composition for the viewer.

Builds one complete screen (hide cursor, draw rows, place cursor, show
cursor) into a single buffer and flushes it with one ``os.write`` so the
terminal never shows a half-drawn frame.
"""

from __future__ import annotations

import os

from . import __version__
from .buffer import LineStore
from .geometry import ScreenGeometry
from .viewport import CursorState, ViewOffset

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
ERASE_TO_EOL = b"\x1b[K"
ROW_SEPARATOR = b"\r\n"
FILLER_MARKER = b"~"
WELCOME_MESSAGE = f"Kiloview -- version {__version__}"


class FrameBuffer:
    """Growable byte buffer for one frame; ``append`` is the only mutation."""

    def __init__(self) -> None:
        self._data = bytearray()

    def append(self, chunk: bytes) -> None:
        self._data += chunk

    def __len__(self) -> int:
        return len(self._data)

    def getvalue(self) -> bytes:
        return bytes(self._data)


def cursor_position(row: int, col: int) -> bytes:
    """CUP sequence for a 1-based ``row``/``col``."""
    return f"\x1b[{row};{col}H".encode("ascii")


def welcome_banner(screen_cols: int, message: str = WELCOME_MESSAGE) -> bytes:
    """Centered banner row; the leading pad keeps the filler marker."""
    text = message.encode("utf-8")[: max(0, screen_cols)]
    padding = (screen_cols - len(text)) // 2
    out = bytearray()
    if padding > 0:
        out += FILLER_MARKER
        padding -= 1
    out += b" " * padding
    out += text
    return bytes(out)


def visible_slice(chars: bytes, column_offset: int, screen_cols: int) -> bytes:
    """Horizontal window ``[column_offset, column_offset + screen_cols)`` of a line."""
    if column_offset >= len(chars) or screen_cols <= 0:
        return b""
    return chars[column_offset : column_offset + screen_cols]


def draw_rows(
    frame: FrameBuffer,
    view: ViewOffset,
    lines: LineStore,
    geometry: ScreenGeometry,
) -> None:
    for screen_row in range(geometry.rows):
        file_row = screen_row + view.row_offset
        if file_row >= lines.line_count:
            if lines.line_count == 0 and screen_row == geometry.rows // 3:
                frame.append(welcome_banner(geometry.cols))
            else:
                frame.append(FILLER_MARKER)
        else:
            frame.append(visible_slice(lines[file_row].chars, view.column_offset, geometry.cols))
        frame.append(ERASE_TO_EOL)
        if screen_row < geometry.rows - 1:
            frame.append(ROW_SEPARATOR)


def compose_frame(
    view: ViewOffset,
    cursor: CursorState,
    lines: LineStore,
    geometry: ScreenGeometry,
) -> FrameBuffer:
    """Build the full byte stream for one redraw without writing it."""
    frame = FrameBuffer()
    frame.append(HIDE_CURSOR)
    frame.append(CURSOR_HOME)
    draw_rows(frame, view, lines, geometry)
    frame.append(
        cursor_position(
            cursor.row - view.row_offset + 1,
            cursor.column - view.column_offset + 1,
        )
    )
    frame.append(SHOW_CURSOR)
    return frame


class FrameCompositor:
    """Compose frames and flush each one to ``stdout_fd`` in a single write."""

    def __init__(self, stdout_fd: int) -> None:
        self.stdout_fd = stdout_fd

    def refresh(
        self,
        view: ViewOffset,
        cursor: CursorState,
        lines: LineStore,
        geometry: ScreenGeometry,
    ) -> int:
        frame = compose_frame(view, cursor, lines, geometry)
        return os.write(self.stdout_fd, frame.getvalue())
