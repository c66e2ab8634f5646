"""Cursor motion and vertical scrolling over a ``LineStore``.

All functions are pure: they take the current cursor/offset and return new
values. The cursor row may sit one past the last line (an empty virtual
row), and the column is always clamped to the length of the cursor's line.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .buffer import LineStore
from .geometry import ScreenGeometry
from .input.keys import ARROW_KEYS, Key, KeyEvent


@dataclass(frozen=True)
class CursorState:
    row: int = 0
    column: int = 0


@dataclass(frozen=True)
class ViewOffset:
    row_offset: int = 0
    column_offset: int = 0


def scroll(view: ViewOffset, cursor: CursorState, screen_rows: int) -> ViewOffset:
    """Shift ``row_offset`` just enough to keep ``cursor.row`` on screen.

    Afterwards ``row_offset <= cursor.row < row_offset + screen_rows``.
    """
    row_offset = view.row_offset
    if cursor.row < row_offset:
        row_offset = cursor.row
    if cursor.row >= row_offset + screen_rows:
        row_offset = cursor.row - screen_rows + 1
    if row_offset == view.row_offset:
        return view
    return replace(view, row_offset=row_offset)


def clamp_cursor(cursor: CursorState, lines: LineStore) -> CursorState:
    """Pull row into ``[0, line_count]`` and column into ``[0, line_length]``."""
    row = max(0, min(cursor.row, lines.line_count))
    column = max(0, min(cursor.column, lines.line_length(row)))
    if row == cursor.row and column == cursor.column:
        return cursor
    return CursorState(row=row, column=column)


def _step(key: Key, cursor: CursorState, lines: LineStore) -> CursorState:
    row, column = cursor.row, cursor.column
    on_line = row < lines.line_count

    if key is Key.LEFT:
        if column != 0:
            column -= 1
        elif row > 0:
            row -= 1
            column = lines.line_length(row)
    elif key is Key.RIGHT:
        if on_line and column < lines.line_length(row):
            column += 1
        elif on_line and column == lines.line_length(row):
            row += 1
            column = 0
    elif key is Key.UP:
        if row != 0:
            row -= 1
    elif key is Key.DOWN:
        if row < lines.line_count:
            row += 1

    # No remembered column: a shorter line truncates it for good.
    return clamp_cursor(CursorState(row=row, column=column), lines)


def move_cursor(
    key: KeyEvent,
    cursor: CursorState,
    lines: LineStore,
    geometry: ScreenGeometry,
) -> CursorState:
    """Apply one navigation key and return the new cursor.

    Arrows move one cell with wrap-around at line ends; PAGE_UP/PAGE_DOWN
    repeat the vertical move ``geometry.rows`` times. HOME jumps to column 0
    and END to the last screen column, clamped to the line. Other keys leave
    the cursor where it is.
    """
    if key in ARROW_KEYS:
        return _step(key, cursor, lines)
    if key is Key.PAGE_UP or key is Key.PAGE_DOWN:
        step = Key.UP if key is Key.PAGE_UP else Key.DOWN
        for _ in range(geometry.rows):
            cursor = _step(step, cursor, lines)
        return cursor
    if key is Key.HOME:
        return clamp_cursor(replace(cursor, column=0), lines)
    if key is Key.END:
        return clamp_cursor(replace(cursor, column=geometry.cols - 1), lines)
    return clamp_cursor(cursor, lines)
