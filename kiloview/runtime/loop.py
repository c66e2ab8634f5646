"""Main interactive loop for the viewer.

Alternates strictly between drawing one frame and decoding one key; nothing
overlaps. The loop returns when the quit key is read, after clearing the
screen once.
"""

from __future__ import annotations

import logging

from ..input import KeyDecoder, KeyEvent, describe_key
from ..render import FrameCompositor
from ..terminal import clear_screen
from ..viewport import move_cursor, scroll
from .state import ViewerState

logger = logging.getLogger(__name__)


def process_key(state: ViewerState, key: KeyEvent, quit_byte: int) -> bool:
    """Apply one key to ``state``; return ``True`` when the viewer should quit."""
    if key == quit_byte:
        return True
    state.cursor = move_cursor(key, state.cursor, state.lines, state.geometry)
    logger.debug("key %s -> %s", describe_key(key), state.cursor)
    return False


def refresh_screen(state: ViewerState, compositor: FrameCompositor) -> None:
    state.view = scroll(state.view, state.cursor, state.geometry.rows)
    compositor.refresh(state.view, state.cursor, state.lines, state.geometry)


def run_main_loop(
    state: ViewerState,
    decoder: KeyDecoder,
    compositor: FrameCompositor,
    quit_byte: int,
) -> None:
    """Draw and read keys until the quit key arrives."""
    while True:
        refresh_screen(state, compositor)
        key = decoder.read_key()
        if process_key(state, key, quit_byte):
            clear_screen(compositor.stdout_fd)
            logger.info("quit requested")
            return
