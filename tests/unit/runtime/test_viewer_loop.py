from __future__ import annotations

import os
import unittest

from kiloview.buffer import LineStore
from kiloview.geometry import ScreenGeometry
from kiloview.input import Key, ctrl_key
from kiloview.render import FrameCompositor
from kiloview.runtime.loop import process_key, refresh_screen, run_main_loop
from kiloview.runtime.state import ViewerState
from kiloview.viewport import CursorState, ViewOffset

QUIT = ctrl_key("q")


class _ScriptedDecoder:
    def __init__(self, keys) -> None:
        self.keys = list(keys)

    def read_key(self):
        return self.keys.pop(0)


class _RecordingCompositor:
    def __init__(self) -> None:
        self.stdout_fd = -1
        self.frames: list[tuple[ViewOffset, CursorState]] = []

    def refresh(self, view, cursor, lines, geometry) -> int:
        self.frames.append((view, cursor))
        return 0


def _state(lines: LineStore, rows: int = 3, cols: int = 20) -> ViewerState:
    return ViewerState(lines=lines, geometry=ScreenGeometry(rows=rows, cols=cols))


class ProcessKeyTests(unittest.TestCase):
    def test_quit_byte_requests_exit_without_moving(self) -> None:
        state = _state(LineStore([b"abc"]))
        state.cursor = CursorState(0, 2)

        self.assertTrue(process_key(state, QUIT, QUIT))
        self.assertEqual(state.cursor, CursorState(0, 2))

    def test_navigation_key_moves_cursor(self) -> None:
        state = _state(LineStore([b"abc", b"de"]))

        self.assertFalse(process_key(state, Key.DOWN, QUIT))
        self.assertEqual(state.cursor, CursorState(1, 0))

    def test_plain_q_is_not_quit(self) -> None:
        state = _state(LineStore([b"abc"]))
        self.assertFalse(process_key(state, ord("q"), QUIT))


class RefreshScreenTests(unittest.TestCase):
    def test_refresh_scrolls_before_drawing(self) -> None:
        state = _state(LineStore([b"l%d" % idx for idx in range(10)]), rows=3)
        state.cursor = CursorState(6, 0)
        compositor = _RecordingCompositor()

        refresh_screen(state, compositor)

        self.assertEqual(state.view.row_offset, 4)
        self.assertEqual(compositor.frames, [(ViewOffset(row_offset=4), CursorState(6, 0))])


class RunMainLoopTests(unittest.TestCase):
    def test_loop_alternates_frames_and_keys_until_quit(self) -> None:
        state = _state(LineStore([b"l%d" % idx for idx in range(10)]), rows=3)
        decoder = _ScriptedDecoder([Key.DOWN, Key.DOWN, Key.DOWN, Key.PAGE_DOWN, QUIT, Key.UP])
        compositor = _RecordingCompositor()
        read_fd, write_fd = os.pipe()
        compositor.stdout_fd = write_fd
        try:
            run_main_loop(state, decoder, compositor, quit_byte=QUIT)
            os.close(write_fd)
            write_fd = None
            tail = os.read(read_fd, 1024)
        finally:
            os.close(read_fd)
            if write_fd is not None:
                os.close(write_fd)

        self.assertEqual(decoder.keys, [Key.UP])
        self.assertEqual(len(compositor.frames), 5)
        self.assertEqual([frame[0].row_offset for frame in compositor.frames], [0, 0, 0, 1, 4])
        self.assertEqual(state.cursor, CursorState(6, 0))
        self.assertEqual(tail, b"\x1b[2J\x1b[H")

    def test_real_compositor_output_ends_with_single_clear(self) -> None:
        state = _state(LineStore(), rows=6, cols=30)
        decoder = _ScriptedDecoder([Key.RIGHT, QUIT])
        read_fd, write_fd = os.pipe()
        try:
            run_main_loop(state, decoder, FrameCompositor(write_fd), quit_byte=QUIT)
            os.close(write_fd)
            write_fd = None
            output = os.read(read_fd, 65536)
        finally:
            os.close(read_fd)
            if write_fd is not None:
                os.close(write_fd)

        self.assertEqual(output.count(b"\x1b[2J"), 1)
        self.assertTrue(output.endswith(b"\x1b[2J\x1b[H"))
        self.assertEqual(output.count(b"\x1b[?25l"), 2)


if __name__ == "__main__":
    unittest.main()
