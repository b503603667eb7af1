"""
Error handling tests for the decision engine.

Tests cover the error classification, data quality failures at the event
boundary, and the no-retry treatment of execution failures.
"""

import math
from unittest.mock import Mock, patch

import pytest

from scalp_app.config.validation import ValidationError
from scalp_app.data.models import IndicatorSample, MarketQuote
from scalp_app.engine import ScalpDecisionEngine
from scalp_app.errors import (
    ConfigurationError,
    DataQualityError,
    ExecutionError,
    InsufficientDataError,
    MalformedDataError,
    MissingDataError,
    ModificationRejectedError,
    OrderRejectedError,
)
from scalp_app.execution.base import BaseOrderExecutor
from scalp_app.models.trading import ExecutionStatus, OrderIntent, StopAdjustment, TradeDirection


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Data quality errors are recoverable and carry context."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        missing_error = MissingDataError("missing data", data_type="market_quote")
        assert isinstance(missing_error, DataQualityError)
        assert missing_error.data_type == "market_quote"

        malformed_error = MalformedDataError("bad value", field="bid", value=-1.0)
        assert isinstance(malformed_error, DataQualityError)
        assert (malformed_error.field, malformed_error.value) == ("bid", -1.0)

        insufficient_error = InsufficientDataError("short history", required_count=22, available_count=5)
        assert insufficient_error.required_count == 22
        assert insufficient_error.available_count == 5

    def test_execution_error_hierarchy(self):
        """Execution failures are not recoverable by the engine."""
        rejected = OrderRejectedError("no margin", label="ScalpIst", direction="long")
        assert isinstance(rejected, ExecutionError)
        assert rejected.recoverable is False
        assert rejected.label == "ScalpIst"

        modification = ModificationRejectedError("too close", position_id="P-1", requested_stop=1.0995)
        assert modification.position_id == "P-1"
        assert modification.requested_stop == 1.0995

    def test_configuration_error_lists_fields(self):
        error = ConfigurationError(
            "Invalid configuration for EURUSD",
            errors=[ValidationError("risk_percent", "Must be between 0 and 100", -1)],
        )
        assert error.recoverable is False
        assert "risk_percent: Must be between 0 and 100 (got: -1)" in str(error)

    def test_configuration_error_without_fields(self):
        assert str(ConfigurationError("bad")) == "bad"

    def test_data_quality_and_execution_are_disjoint(self):
        assert not issubclass(ExecutionError, DataQualityError)
        assert not issubclass(ConfigurationError, DataQualityError)


class TestEngineErrorHandling:
    """Test error handling at the engine event boundary."""

    @pytest.mark.parametrize("field", ["fast_trend", "slow_trend_prev", "momentum", "volatility"])
    @pytest.mark.parametrize("bad_value", [math.nan, math.inf, None])
    def test_bad_sample_values_skip_event(
        self, field, bad_value, bar_time, long_sample, tight_quote, account, eurusd_spec
    ):
        engine = ScalpDecisionEngine()
        values = {**long_sample.__dict__, field: bad_value}
        sample = IndicatorSample(**values)

        assert engine.on_bar(bar_time, sample, tight_quote, account, eurusd_spec, []) is None

    def test_missing_quote_skips_event(self, bar_time, long_sample, account, eurusd_spec):
        engine = ScalpDecisionEngine()
        assert engine.on_bar(bar_time, long_sample, None, account, eurusd_spec, []) is None

    def test_missing_account_skips_event(self, bar_time, long_sample, tight_quote, eurusd_spec):
        engine = ScalpDecisionEngine()
        assert engine.on_bar(bar_time, long_sample, tight_quote, None, eurusd_spec, []) is None

    def test_next_event_after_bad_one_is_evaluated(
        self, bar_time, long_sample, tight_quote, account, eurusd_spec
    ):
        """A skipped event leaves no residue for the next one."""
        engine = ScalpDecisionEngine()
        bad_quote = MarketQuote(bid=math.nan, ask=1.1001, pip_size=0.0001)

        assert engine.on_bar(bar_time, long_sample, bad_quote, account, eurusd_spec, []) is None
        assert engine.on_bar(bar_time, long_sample, tight_quote, account, eurusd_spec, []) is not None

    def test_unexpected_errors_propagate(self, bar_time, long_sample, tight_quote, account, eurusd_spec):
        engine = ScalpDecisionEngine()
        with patch.object(engine.planner, "plan", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                engine.on_bar(bar_time, long_sample, tight_quote, account, eurusd_spec, [])


class _FlakyExecutor(BaseOrderExecutor):
    """Executor whose collaborator fails a configurable way."""

    def __init__(self, error: Exception):
        super().__init__("flaky")
        self.error = error
        self.calls = 0

    def _execute(self, intent, quote, now):
        self.calls += 1
        raise self.error

    def _modify(self, adjustment):
        self.calls += 1
        raise self.error


class TestExecutionFailures:
    """Execution failures are reported, never retried."""

    def _intent(self) -> OrderIntent:
        return OrderIntent(
            direction=TradeDirection.LONG,
            volume=1000.0,
            stop_loss_price=1.0994,
            take_profit_price=1.1005,
            label="ScalpIst",
            symbol="EURUSD",
        )

    def test_rejected_order_returns_failure(self, tight_quote):
        executor = _FlakyExecutor(OrderRejectedError("Not enough money"))
        result = executor.execute(self._intent(), tight_quote)

        assert result.status == ExecutionStatus.FAILED
        assert not result.succeeded
        assert "Not enough money" in result.message
        assert isinstance(result.error, OrderRejectedError)
        assert executor.calls == 1
        assert executor.get_stats()["error_count"] == 1

    def test_rejected_modification_returns_failure(self):
        executor = _FlakyExecutor(ModificationRejectedError("Invalid stop", position_id="P-1"))
        result = executor.modify(StopAdjustment(position_id="P-1", new_stop_loss=1.0995))

        assert not result.succeeded
        assert executor.calls == 1

    def test_unexpected_executor_error_propagates(self, tight_quote):
        executor = _FlakyExecutor(ValueError("bug"))
        with pytest.raises(ValueError):
            executor.execute(self._intent(), tight_quote)

    def test_engine_reports_failure_once(self):
        engine = ScalpDecisionEngine()
        executor = _FlakyExecutor(OrderRejectedError("closed market"))
        result = executor.execute(self._intent(), Mock(ts=None))

        with patch.object(engine, "logger") as mock_logger:
            engine.on_error(result)

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["error_type"] == "OrderRejectedError"
