"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from roomctl.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("roomctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("roomctl").level == logging.WARNING

    def test_sqlalchemy_kept_quiet(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("sqlalchemy").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("roomctl.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "roomctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_rendered_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("roomctl.services.migrate").info("Migrated %d rows", 3)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Migrated 3 rows"
        assert parsed["logger"] == "roomctl.services.migrate"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("roomctl.test").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_exception_rendered_in_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logging.getLogger("roomctl.infrastructure").warning("Rollback failed", exc_info=True)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Rollback failed"
        assert "RuntimeError: boom" in parsed["exception"]

    def test_single_handler_after_reconfigure(self) -> None:
        configure_logging(verbose=False, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
