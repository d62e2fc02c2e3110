"""Tests for logging setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.logging import RichHandler

if TYPE_CHECKING:
    from pathlib import Path

from minimcp.utils.log import configure_logging


class TestConfigureLogging:
    def test_console_handler_only(self) -> None:
        configure_logging("INFO")
        logger = logging.getLogger("minimcp")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.INFO
        assert logger.propagate is False

    def test_file_handler_records_debug(self, tmp_path: Path) -> None:
        log_file = tmp_path / "server.log"
        configure_logging("ERROR", str(log_file))
        logger = logging.getLogger("minimcp.server.transport")
        logger.debug("INPUT: hello")
        for handler in logging.getLogger("minimcp").handlers:
            handler.flush()
        assert "INPUT: hello" in log_file.read_text(encoding="utf-8")

    def test_reconfigure_replaces_handlers(self, tmp_path: Path) -> None:
        configure_logging("INFO", str(tmp_path / "a.log"))
        configure_logging("INFO")
        assert len(logging.getLogger("minimcp").handlers) == 1
