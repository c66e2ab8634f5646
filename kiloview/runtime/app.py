"""Runtime composition layer for kiloview.

Sets up raw mode and screen geometry, wires decoder and compositor, and runs
the loop. This is the single place where fatal errors are handled before
they reach the CLI.
"""

from __future__ import annotations

import logging
import sys

from ..buffer import LineStore
from ..errors import KiloviewError
from ..geometry import query_geometry
from ..input import KeyDecoder, ctrl_key
from ..render import FrameCompositor
from ..terminal import TerminalController, clear_screen
from .config import ViewerConfig
from .loop import run_main_loop
from .state import ViewerState

logger = logging.getLogger(__name__)


def _best_effort_clear(stdout_fd: int) -> None:
    try:
        clear_screen(stdout_fd)
    except OSError:
        logger.warning("could not clear screen during fatal shutdown")


def run_viewer(
    lines: LineStore,
    config: ViewerConfig | None = None,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run the interactive viewer until the user quits.

    Raises ``KiloviewError`` subclasses for fatal conditions after clearing
    the screen; the terminal mode is restored by ``raw_mode`` on every path.
    """
    config = config or ViewerConfig()
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd

    terminal = TerminalController(stdin_fd, stdout_fd, read_timeout_tenths=config.read_timeout_tenths)
    try:
        with terminal.raw_mode():
            geometry = query_geometry(stdin_fd, stdout_fd, timeout_ms=config.read_timeout_ms)
            logger.info("screen geometry %dx%d", geometry.rows, geometry.cols)
            state = ViewerState(lines=lines, geometry=geometry)
            run_main_loop(
                state,
                KeyDecoder(stdin_fd, timeout_ms=config.read_timeout_ms),
                FrameCompositor(stdout_fd),
                quit_byte=ctrl_key(config.quit_key),
            )
    except KiloviewError as exc:
        logger.error("fatal: %s", exc)
        _best_effort_clear(stdout_fd)
        raise


def print_source(data: bytes) -> None:
    """Non-interactive path: copy the file bytes to stdout unchanged."""
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()
