"""Tests for the audit loggers and logging configuration."""

import io
import json
import logging

import structlog
from structlog.testing import capture_logs

from scalp_app.logging.config import (
    configure_logging,
    get_gating_logger,
    get_trade_logger,
    log_gate_decision,
)


class TestGateDecisionLogging:
    """Gate outcomes are recorded with a standard set of fields."""

    def test_failed_gate_logged_at_info(self):
        with capture_logs() as logs:
            log_gate_decision(
                get_gating_logger("test"),
                gate_name="spread",
                passed=False,
                symbol="EURUSD",
                reason="Spread 3.00 pips vs max 2.00",
                context={"spread_pips": 3.0},
            )

        assert len(logs) == 1
        entry = logs[0]
        assert entry["log_level"] == "info"
        assert entry["event"] == "Gate failed"
        assert entry["gate_result"] == "FAIL"
        assert entry["subsystem"] == "gating"
        assert entry["symbol"] == "EURUSD"
        assert entry["context"] == {"spread_pips": 3.0}

    def test_passed_gate_logged_at_debug_without_context(self):
        with capture_logs() as logs:
            log_gate_decision(
                get_gating_logger("test"),
                gate_name="trading_hours",
                passed=True,
                symbol=None,
                reason="Hour 10 inside window [0, 23]",
            )

        assert logs[0]["log_level"] == "debug"
        assert logs[0]["gate_result"] == "PASS"
        assert "context" not in logs[0]

    def test_trade_logger_binds_subsystem(self):
        with capture_logs() as logs:
            get_trade_logger("test").info("Position opened", position_id="P-1")

        assert logs[0]["subsystem"] == "trading"
        assert logs[0]["audit_trail"] is True


class TestConfigureLogging:

    def teardown_method(self):
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_json_output(self):
        stream = io.StringIO()
        configure_logging(level="INFO", format_json=True, stream=stream)

        structlog.get_logger("scalp_app.test").info("Entry intent planned", volume=1000.0)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "Entry intent planned"
        assert record["volume"] == 1000.0
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters_debug(self):
        stream = io.StringIO()
        configure_logging(level="INFO", format_json=True, stream=stream)

        structlog.get_logger("scalp_app.test").debug("Gate passed")

        assert stream.getvalue() == ""
