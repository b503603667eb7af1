"""Base classes for order execution and the position ledger contract."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional, Protocol

import structlog

from ..data.models import MarketQuote
from ..errors import ExecutionError
from ..models.trading import ExecutionResult, OrderIntent, Position, StopAdjustment


class PositionLedger(Protocol):
    """Authoritative view of open positions; the engine only reads it."""

    def find_all(self, label: str, symbol: Optional[str] = None) -> list[Position]:
        ...


class BaseOrderExecutor(ABC):
    """
    Base class for execution collaborators.

    Subclasses implement ``_execute`` and ``_modify`` and raise an
    ExecutionError subclass when the broker refuses. The public methods
    turn that into a failed ExecutionResult. There is no retry: a failed
    intent simply produces no position.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"execution.{name}")
        self._execution_count = 0
        self._error_count = 0

    @abstractmethod
    def _execute(self, intent: OrderIntent, quote: MarketQuote, now: Optional[datetime]) -> Position:
        """Place a market order and return the resulting position."""

    @abstractmethod
    def _modify(self, adjustment: StopAdjustment) -> Position:
        """Replace a position's stop loss and return the updated position."""

    def execute(
        self,
        intent: OrderIntent,
        quote: MarketQuote,
        now: Optional[datetime] = None
    ) -> ExecutionResult:
        """Submit an entry intent."""
        try:
            position = self._execute(intent, quote, now)
        except ExecutionError as e:
            self._error_count += 1
            self.logger.error(
                "Order rejected",
                executor=self.name,
                intent=intent.to_dict(),
                error=str(e),
                error_type=type(e).__name__,
            )
            return ExecutionResult.failure(f"Order rejected: {e}", error=e)

        self._execution_count += 1
        return ExecutionResult.success(
            f"Opened {position.direction.value} {position.volume} at {position.entry_price}",
            position=position,
        )

    def modify(self, adjustment: StopAdjustment) -> ExecutionResult:
        """Submit a stop adjustment."""
        try:
            position = self._modify(adjustment)
        except ExecutionError as e:
            self._error_count += 1
            self.logger.error(
                "Modification rejected",
                executor=self.name,
                position_id=adjustment.position_id,
                new_stop_loss=adjustment.new_stop_loss,
                error=str(e),
                error_type=type(e).__name__,
            )
            return ExecutionResult.failure(f"Modification rejected: {e}", error=e)

        self._execution_count += 1
        return ExecutionResult.success(
            f"Stop for {position.id} moved to {position.stop_loss}",
            position=position,
        )

    def get_stats(self) -> dict[str, Any]:
        """Get execution statistics."""
        return {
            "name": self.name,
            "execution_count": self._execution_count,
            "error_count": self._error_count,
            "success_rate": (
                self._execution_count / (self._execution_count + self._error_count)
                if (self._execution_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self) -> None:
        """Reset execution statistics."""
        self._execution_count = 0
        self._error_count = 0
