"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from userlist.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("userlist").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("userlist").level == logging.WARNING

    def test_http_request_lines_follow_verbosity(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("httpx").level == logging.INFO
        assert logging.getLogger("httpcore").level == logging.WARNING
        configure_logging(verbose=False)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("userlist.test")
        log.warning("load.failed", endpoint="http://x")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "load.failed"
        assert parsed["endpoint"] == "http://x"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "userlist.test"
        assert "timestamp" in parsed

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("userlist.test").debug("hidden")
        assert capfd.readouterr().err == ""
