"""
Trading data models exchanged between the engine and its collaborators.

Positions are owned by the external ledger. The engine reads them and
proposes OrderIntent and StopAdjustment values; it never mutates a
position itself.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TradeDirection(str, Enum):
    """Side of a position or order."""
    LONG = "long"
    SHORT = "short"

    @property
    def order_side(self) -> str:
        """Broker order side for this direction."""
        return "buy" if self is TradeDirection.LONG else "sell"


class SignalType(str, Enum):
    """Entry signal detected on a closed bar."""
    LONG = "long"
    SHORT = "short"
    NONE = "none"


class SizingMode(str, Enum):
    """How trade volume is derived."""
    FIXED = "fixed"
    RISK_PERCENT = "risk_percent"


class ExecutionStatus(str, Enum):
    """Outcome of an execution attempt against the broker."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class Position:
    """Open position as reported by the ledger."""
    id: str
    direction: TradeDirection
    entry_price: float
    stop_loss: Optional[float]
    take_profit: Optional[float]
    volume: float
    label: str
    opened_at: datetime
    symbol: str = ""


@dataclass(frozen=True)
class OrderIntent:
    """Requested market entry; always carries both stop and target."""
    direction: TradeDirection
    volume: float
    stop_loss_price: float
    take_profit_price: float
    label: str
    symbol: str = ""

    def to_dict(self) -> dict:
        """Serialize for logging and transport."""
        return {
            "direction": self.direction.value,
            "side": self.direction.order_side,
            "volume": self.volume,
            "stop_loss_price": self.stop_loss_price,
            "take_profit_price": self.take_profit_price,
            "label": self.label,
            "symbol": self.symbol,
        }


@dataclass(frozen=True)
class StopAdjustment:
    """Proposed replacement stop-loss for an open position."""
    position_id: str
    new_stop_loss: float
    take_profit: Optional[float] = None  # Carried unchanged to the modify call


@dataclass(frozen=True)
class ExecutionResult:
    """Structured result of an order or modification attempt."""
    status: ExecutionStatus
    message: Optional[str] = None
    position: Optional[Position] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.status is ExecutionStatus.SUCCESS

    @classmethod
    def success(cls, message: str, position: Optional[Position] = None) -> "ExecutionResult":
        return cls(status=ExecutionStatus.SUCCESS, message=message, position=position)

    @classmethod
    def failure(cls, message: str, error: Optional[Exception] = None) -> "ExecutionResult":
        return cls(status=ExecutionStatus.FAILED, message=message, error=error)
