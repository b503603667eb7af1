"""Tests for the admission filter."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from scalp_app.filters.admission import AdmissionFilter


def at_hour(hour: int) -> datetime:
    return datetime(2024, 3, 4, hour, 30, 0, tzinfo=timezone.utc)


class TestAdmissionFilter:
    """Test suite for AdmissionFilter."""

    def test_allows_when_all_gates_pass(self):
        admission = AdmissionFilter(start_hour=0, end_hour=23, max_spread_pips=2.0, max_open_positions=3)
        assert admission.allow(at_hour(12), 1.0, 0) is True

    def test_spread_above_max_rejected(self):
        """3.0 pips vs 2.0 max is rejected with no positions and an open window."""
        admission = AdmissionFilter(start_hour=0, end_hour=23, max_spread_pips=2.0, max_open_positions=3)
        assert admission.allow(at_hour(12), 3.0, 0) is False

    def test_spread_equal_to_max_allowed(self):
        admission = AdmissionFilter(max_spread_pips=2.0)
        assert admission.allow(at_hour(12), 2.0, 0) is True

    def test_nan_spread_rejected(self):
        admission = AdmissionFilter(max_spread_pips=2.0)
        assert admission.allow(at_hour(12), float("nan"), 0) is False

    @pytest.mark.parametrize("count", [3, 4, 10])
    def test_exposure_at_or_above_max_rejected(self, count):
        admission = AdmissionFilter(max_open_positions=3)
        assert admission.allow(at_hour(12), 0.5, count) is False

    @pytest.mark.parametrize("hour", range(24))
    @pytest.mark.parametrize("spread", [0.0, 1.0, 5.0])
    def test_max_positions_rejects_regardless_of_time_and_spread(self, hour, spread):
        admission = AdmissionFilter(start_hour=0, end_hour=23, max_spread_pips=10.0, max_open_positions=2)
        assert admission.allow(at_hour(hour), spread, 2) is False

    def test_below_max_positions_allowed(self):
        admission = AdmissionFilter(max_open_positions=3)
        assert admission.allow(at_hour(12), 0.5, 2) is True

    @pytest.mark.parametrize("hour,expected", [
        (6, False),
        (7, True),
        (13, True),
        (20, True),
        (21, False),
    ])
    def test_trading_window_is_inclusive(self, hour, expected):
        admission = AdmissionFilter(start_hour=7, end_hour=20)
        assert admission.allow(at_hour(hour), 0.5, 0) is expected

    def test_single_hour_window(self):
        admission = AdmissionFilter(start_hour=9, end_hour=9)
        assert admission.allow(at_hour(9), 0.5, 0) is True
        assert admission.allow(at_hour(10), 0.5, 0) is False

    @pytest.mark.parametrize("hour", [0, 3, 21, 22, 23])
    def test_inverted_window_admits_nothing(self, hour):
        """start_hour > end_hour is empty, not a wrap past midnight."""
        admission = AdmissionFilter(start_hour=22, end_hour=2)
        assert admission.allow(at_hour(hour), 0.5, 0) is False

    def test_naive_time_used_as_feed_time(self):
        admission = AdmissionFilter(start_hour=7, end_hour=20)
        assert admission.allow(datetime(2024, 3, 4, 8, 0), 0.5, 0) is True

    def test_aware_time_converted_to_feed_zone(self):
        """A UTC+2 timestamp at 08:00 is 06:00 in a UTC feed."""
        from datetime import timedelta
        plus_two = timezone(timedelta(hours=2))
        admission = AdmissionFilter(start_hour=7, end_hour=20, timezone="UTC")
        assert admission.allow(datetime(2024, 3, 4, 8, 0, tzinfo=plus_two), 0.5, 0) is False

    def test_gate_decisions_are_logged(self):
        admission = AdmissionFilter(max_spread_pips=2.0, symbol="EURUSD")
        with patch("scalp_app.filters.admission.log_gate_decision") as mock_log:
            admission.allow(at_hour(12), 3.0, 0)

        gate_names = [call.kwargs["gate_name"] for call in mock_log.call_args_list]
        assert gate_names == ["trading_hours", "spread"]
        assert mock_log.call_args_list[-1].kwargs["passed"] is False
        assert mock_log.call_args_list[-1].kwargs["symbol"] == "EURUSD"

    def test_allow_has_no_side_effects(self):
        admission = AdmissionFilter(max_open_positions=1)
        first = admission.allow(at_hour(12), 0.5, 0)
        second = admission.allow(at_hour(12), 0.5, 0)
        assert first == second is True
