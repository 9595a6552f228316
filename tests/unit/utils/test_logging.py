"""Tests for logging configuration and correlation IDs."""

from __future__ import annotations

import logging
import logging.handlers
import socket
import sys
from pathlib import Path

import pytest

from split_or_die.utils.logging import (
    CorrelationIDFilter,
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    log_with_context,
    set_correlation_id,
)


def _record(message: str = "msg") -> logging.LogRecord:
    return logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)


class TestCorrelationId:
    """Test correlation ID helpers and filter."""

    def test_set_get_clear(self) -> None:
        set_correlation_id("scan-3")
        assert get_correlation_id() == "scan-3"

        clear_correlation_id()
        assert get_correlation_id() is None

    def test_filter_adds_correlation_id(self) -> None:
        set_correlation_id("scan-7")
        record = _record()

        assert CorrelationIDFilter().filter(record)
        assert record.__dict__["correlation_id"] == "scan-7"

    def test_filter_outside_scan(self) -> None:
        record = _record()

        _ = CorrelationIDFilter().filter(record)

        assert record.__dict__["correlation_id"] == "N/A"


class TestConfigureLogging:
    """Test configure_logging."""

    def test_console_handler_on_stderr(self) -> None:
        configure_logging(log_level="DEBUG")
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr  # pyright: ignore[reportUnknownMemberType]
        assert any(isinstance(f, CorrelationIDFilter) for f in handler.filters)

    def test_repeated_calls_do_not_duplicate_handlers(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_console_disabled(self) -> None:
        configure_logging(enable_console=False)
        assert logging.getLogger().handlers == []

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging(log_level="CHATTY")
        assert logging.getLogger().level == logging.INFO

    def test_unreachable_syslog_warns(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(enable_syslog=True, syslog_address=str(tmp_path / "missing.sock"), enable_console=False)

        assert "Could not connect to syslog" in capsys.readouterr().err
        assert logging.getLogger().handlers == []

    def test_unreachable_syslog_keeps_console(self, tmp_path: Path) -> None:
        configure_logging(enable_syslog=True, syslog_address=str(tmp_path / "missing.sock"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    @pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="unix sockets required")
    def test_reachable_syslog_adds_handler(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        address = str(tmp_path / "log.sock")
        if len(address) >= 100:
            pytest.skip("temporary path too long for a unix socket")
        with socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM) as server:
            server.bind(address)

            configure_logging(enable_syslog=True, syslog_address=address, enable_console=False)

            handlers = logging.getLogger().handlers
            assert len(handlers) == 1
            assert isinstance(handlers[0], logging.handlers.SysLogHandler)
            handlers[0].close()

        assert capsys.readouterr().err == ""


class TestLogWithContext:
    """Test log_with_context."""

    def test_extra_fields_and_correlation_id(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("split_or_die.test")
        set_correlation_id("scan-1")

        with caplog.at_level(logging.INFO, logger="split_or_die.test"):
            log_with_context(logger, logging.INFO, "Workspace scan complete", extra={"oversized": 2})

        record = caplog.records[-1]
        assert record.getMessage() == "Workspace scan complete"
        assert record.__dict__["oversized"] == 2
        assert record.__dict__["correlation_id"] == "scan-1"

    def test_without_extra(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("split_or_die.test")

        with caplog.at_level(logging.INFO, logger="split_or_die.test"):
            log_with_context(logger, logging.INFO, "plain")

        assert "correlation_id" not in caplog.records[-1].__dict__
