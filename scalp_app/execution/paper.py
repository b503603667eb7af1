"""In-memory paper ledger and executor."""

import itertools
import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional

import structlog

from ..data.models import MarketQuote
from ..errors import ModificationRejectedError, OrderRejectedError
from ..models.trading import OrderIntent, Position, StopAdjustment, TradeDirection
from ..utils.time import get_market_time
from .base import BaseOrderExecutor

logger = structlog.get_logger(__name__)


def is_stop_improvement(position: Position, new_stop_loss: float) -> bool:
    """True if ``new_stop_loss`` tightens the position's stop."""
    if position.direction == TradeDirection.LONG:
        return position.stop_loss is not None and new_stop_loss > position.stop_loss
    return position.stop_loss is None or new_stop_loss < position.stop_loss


def gross_profit(position: Position, exit_price: float) -> float:
    """Gross P/L in quote currency for closing ``position`` at ``exit_price``."""
    if position.direction == TradeDirection.LONG:
        return (exit_price - position.entry_price) * position.volume
    return (position.entry_price - exit_price) * position.volume


class PaperPositionLedger:
    """
    Thread-safe in-memory position ledger.

    Positions are frozen; applying an adjustment replaces the stored record.
    Adjustments that would loosen a stop are refused.
    """

    def __init__(self):
        self._positions: dict[str, Position] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def find_all(self, label: str, symbol: Optional[str] = None) -> list[Position]:
        """Open positions carrying ``label`` (and ``symbol`` if given), oldest first."""
        with self._lock:
            positions = [
                p for p in self._positions.values()
                if p.label == label and (symbol is None or p.symbol == symbol)
            ]
        return sorted(positions, key=lambda p: p.opened_at)

    def get(self, position_id: str) -> Optional[Position]:
        with self._lock:
            return self._positions.get(position_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._positions)

    def open(self, intent: OrderIntent, fill_price: float, opened_at: datetime) -> Position:
        """Record a filled entry."""
        with self._lock:
            position = Position(
                id=f"P-{next(self._ids)}",
                direction=intent.direction,
                entry_price=fill_price,
                stop_loss=intent.stop_loss_price,
                take_profit=intent.take_profit_price,
                volume=intent.volume,
                label=intent.label,
                opened_at=opened_at,
                symbol=intent.symbol,
            )
            self._positions[position.id] = position
        return position

    def apply(self, adjustment: StopAdjustment) -> Position:
        """
        Apply a stop adjustment.

        Raises:
            ModificationRejectedError: Unknown position or non-improving stop
        """
        with self._lock:
            position = self._positions.get(adjustment.position_id)
            if position is None:
                raise ModificationRejectedError(
                    f"Position {adjustment.position_id} is not open",
                    position_id=adjustment.position_id,
                    requested_stop=adjustment.new_stop_loss,
                )
            if not is_stop_improvement(position, adjustment.new_stop_loss):
                raise ModificationRejectedError(
                    f"Stop {adjustment.new_stop_loss} does not tighten {position.stop_loss}",
                    position_id=position.id,
                    requested_stop=adjustment.new_stop_loss,
                    context={"direction": position.direction.value},
                )
            updated = replace(position, stop_loss=adjustment.new_stop_loss)
            self._positions[position.id] = updated
        return updated

    def close(self, position_id: str, exit_price: float) -> tuple[Position, float]:
        """Remove a position and return it with its gross P/L."""
        with self._lock:
            position = self._positions.pop(position_id)
        return position, gross_profit(position, exit_price)

    def check_exits(self, quote: MarketQuote) -> list[tuple[Position, float]]:
        """
        Close positions whose stop or target the quote has reached.

        Longs exit on the bid, shorts on the ask.
        """
        with self._lock:
            candidates = list(self._positions.values())

        closed = []
        for position in candidates:
            if position.direction == TradeDirection.LONG:
                price = quote.bid
                hit_stop = position.stop_loss is not None and price <= position.stop_loss
                hit_target = position.take_profit is not None and price >= position.take_profit
            else:
                price = quote.ask
                hit_stop = position.stop_loss is not None and price >= position.stop_loss
                hit_target = position.take_profit is not None and price <= position.take_profit

            if hit_stop or hit_target:
                closed.append(self.close(position.id, price))
                logger.debug(
                    "Paper position closed",
                    position_id=position.id,
                    exit_price=price,
                    reason="stop_loss" if hit_stop else "take_profit",
                )

        return closed


class PaperOrderExecutor(BaseOrderExecutor):
    """Fills intents immediately against the quote: buys at ask, sells at bid."""

    def __init__(self, ledger: PaperPositionLedger, name: str = "paper"):
        super().__init__(name)
        self.ledger = ledger

    def _execute(self, intent: OrderIntent, quote: MarketQuote, now: Optional[datetime]) -> Position:
        if intent.volume <= 0:
            raise OrderRejectedError(
                f"Volume must be positive, got {intent.volume}",
                label=intent.label,
                direction=intent.direction.value,
            )

        fill_price = quote.ask if intent.direction == TradeDirection.LONG else quote.bid

        if intent.direction == TradeDirection.LONG:
            stop_valid = intent.stop_loss_price < fill_price
        else:
            stop_valid = intent.stop_loss_price > fill_price
        if not stop_valid:
            raise OrderRejectedError(
                f"Stop loss {intent.stop_loss_price} on wrong side of fill {fill_price}",
                label=intent.label,
                direction=intent.direction.value,
            )

        return self.ledger.open(intent, fill_price, get_market_time(now or quote.ts))

    def _modify(self, adjustment: StopAdjustment) -> Position:
        return self.ledger.apply(adjustment)
