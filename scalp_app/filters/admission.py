"""
Admission gates for new entries.

A pure predicate over time of day, spread and current exposure. Each gate
is logged through the gating logger so rejected bars can be audited.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..logging.config import get_gating_logger, log_gate_decision
from ..utils.time import feed_hour

gating_logger = get_gating_logger(__name__)


@dataclass(frozen=True)
class AdmissionFilter:
    """
    Decides whether a new entry may be attempted.

    All gates must pass:
    - the hour of ``now`` in the feed time zone lies in the inclusive
      [start_hour, end_hour] window; an inverted window admits nothing
    - spread_pips <= max_spread_pips
    - open_position_count < max_open_positions
    """

    start_hour: int = 0
    end_hour: int = 23
    max_spread_pips: float = 2.0
    max_open_positions: int = 3
    timezone: str = "UTC"
    symbol: Optional[str] = None

    def allow(self, now: datetime, spread_pips: float, open_position_count: int) -> bool:
        """Return True if every admission gate passes."""
        return (
            self.check_trading_hours(now)
            and self.check_spread(spread_pips)
            and self.check_exposure(open_position_count)
        )

    def check_trading_hours(self, now: datetime) -> bool:
        hour = feed_hour(now, self.timezone)
        passed = self.start_hour <= hour <= self.end_hour

        log_gate_decision(
            gating_logger,
            gate_name="trading_hours",
            passed=passed,
            symbol=self.symbol,
            reason=(
                f"Hour {hour} {'inside' if passed else 'outside'} "
                f"window [{self.start_hour}, {self.end_hour}]"
            ),
            context={"hour": hour, "start_hour": self.start_hour, "end_hour": self.end_hour},
        )
        return passed

    def check_spread(self, spread_pips: float) -> bool:
        # NaN spread compares False and is rejected
        passed = spread_pips <= self.max_spread_pips

        log_gate_decision(
            gating_logger,
            gate_name="spread",
            passed=passed,
            symbol=self.symbol,
            reason=f"Spread {spread_pips:.2f} pips vs max {self.max_spread_pips:.2f}",
            context={"spread_pips": spread_pips, "max_spread_pips": self.max_spread_pips},
        )
        return passed

    def check_exposure(self, open_position_count: int) -> bool:
        passed = open_position_count < self.max_open_positions

        log_gate_decision(
            gating_logger,
            gate_name="max_open_positions",
            passed=passed,
            symbol=self.symbol,
            reason=f"{open_position_count} open of max {self.max_open_positions}",
            context={
                "open_positions": open_position_count,
                "max_open_positions": self.max_open_positions,
            },
        )
        return passed
