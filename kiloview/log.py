"""File-based logging setup.

The screen belongs to the viewer while it runs, so log records go to a file
under the platform's user log directory instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "kiloview"
LOG_FILENAME = "kiloview.log"
LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_file_handler: logging.Handler | None = None


def configure_logging(level: str = "WARNING", path: Path | None = None) -> logging.Logger:
    """Attach one file handler to the ``kiloview`` logger and set its level.

    Repeated calls only adjust the level. If the log file cannot be opened
    logging is silently disabled rather than failing the viewer.
    """
    global _file_handler
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(level)
    package_logger.propagate = False
    if _file_handler is not None:
        return package_logger

    target = path or LOG_PATH
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    _file_handler = handler
    return package_logger
