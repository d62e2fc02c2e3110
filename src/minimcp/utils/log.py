"""Logging setup for the server process.

Stdout carries the JSON-RPC stream, so console logging goes to stderr.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Install handlers on the ``minimcp`` logger.

    The console handler honours *level*; the optional file handler records
    everything down to DEBUG, including each raw input line.

    Calling it again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger("minimcp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG if log_file else level)
    logger.propagate = False

    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
