"""Log file setup.

The terminal belongs to the UI, so all logging goes to a file. Opening
that file is the one startup step allowed to abort the program.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def open_log_file(path: str, level: str = "DEBUG") -> logging.Handler:
    """Attach a file handler to the package logger.

    Raises:
        OSError: If the file cannot be opened for appending
    """
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("trustcheck_tui")
    package_logger.setLevel(level.upper())
    package_logger.addHandler(handler)
    return handler


def close_log_file(handler: logging.Handler) -> None:
    """Detach and close a handler returned by open_log_file."""
    logging.getLogger("trustcheck_tui").removeHandler(handler)
    handler.close()
