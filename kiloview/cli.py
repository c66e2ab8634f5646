"""Command-line front door for kiloview.

Parses CLI options, loads the optional file into a line store, and then
dispatches into the interactive viewer runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .buffer import LineStore, read_source, split_lines
from .errors import KiloviewError
from .log import configure_logging
from .runtime import run_viewer
from .runtime.app import print_source
from .runtime.config import coerce_log_level, load_viewer_config

logger = logging.getLogger(__name__)


def _is_interactive() -> bool:
    return os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kiloview",
        description="View a file in the terminal and move around it with the cursor keys.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to view. Omit to open an empty screen.")
    parser.add_argument("--nopager", action="store_true", help="Print the file directly without the viewer.")
    parser.add_argument("--log-level", default=None, help="Log level for the log file (e.g. DEBUG, INFO).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the viewer.

    Fatal viewer errors surface as ``SystemExit`` with a one-line diagnostic,
    which gives a non-zero exit status. A normal quit returns, exiting 0.
    """
    args = build_parser().parse_args(argv)
    config = load_viewer_config()
    level = coerce_log_level(args.log_level) if args.log_level is not None else config.log_level
    configure_logging(level)

    try:
        data = b"" if args.path is None else read_source(Path(args.path))
        if args.nopager or not _is_interactive():
            print_source(data)
            return
        lines = LineStore(split_lines(data))
        logger.info("viewing %s (%d lines)", args.path or "<empty>", lines.line_count)
        run_viewer(lines, config)
    except KiloviewError as exc:
        raise SystemExit(f"kiloview: {exc}") from exc


if __name__ == "__main__":
    main()
