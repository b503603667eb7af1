"""
Trailing stop management for open positions.

The ratchet state is the position's own ``stop_loss``: every tick the
candidate stop is compared against it, and an adjustment is proposed only
when it tightens the stop. Nothing is remembered between ticks.
"""

from collections.abc import Iterable
from typing import Optional

import structlog

from ..data.models import MarketQuote
from ..logging.config import get_trade_logger
from ..models.trading import Position, StopAdjustment, TradeDirection

logger = structlog.get_logger(__name__)
trade_logger = get_trade_logger(__name__)


class TrailingStopManager:
    """Computes monotonic stop-loss adjustments."""

    def __init__(self, step_pips: float = 5.0):
        self.step_pips = step_pips

    def update(
        self,
        position: Position,
        quote: MarketQuote,
        trailing_step_pips: Optional[float] = None
    ) -> Optional[StopAdjustment]:
        """
        Propose a tighter stop for one position, or None.

        Long: candidate = bid - step * pip, emitted only if above the
        current stop. A long without a stop is left alone.
        Short: candidate = ask + step * pip, emitted if the position has no
        stop or the candidate is below it.

        Take-profit is passed through unchanged.
        """
        step = self.step_pips if trailing_step_pips is None else trailing_step_pips
        offset = step * quote.pip_size

        if position.direction == TradeDirection.LONG:
            candidate = quote.bid - offset
            if position.stop_loss is None:
                logger.warning(
                    "Long position without stop loss, not trailing",
                    position_id=position.id,
                    candidate=candidate,
                )
                return None
            if candidate <= position.stop_loss:
                return None
        else:
            candidate = quote.ask + offset
            if position.stop_loss is not None and candidate >= position.stop_loss:
                return None

        trade_logger.info(
            "Trailing stop tightened",
            position_id=position.id,
            direction=position.direction.value,
            old_stop_loss=position.stop_loss,
            new_stop_loss=candidate,
            bid=quote.bid,
            ask=quote.ask,
            step_pips=step,
        )

        return StopAdjustment(
            position_id=position.id,
            new_stop_loss=candidate,
            take_profit=position.take_profit,
        )

    def update_all(
        self,
        positions: Iterable[Position],
        quote: MarketQuote,
        trailing_step_pips: Optional[float] = None
    ) -> list[StopAdjustment]:
        """Run ``update`` over every position, collecting adjustments."""
        adjustments = []
        for position in positions:
            adjustment = self.update(position, quote, trailing_step_pips)
            if adjustment is not None:
                adjustments.append(adjustment)
        return adjustments
