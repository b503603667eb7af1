"""
Runtime wiring module.

Connects the decision engine to an indicator provider, ledger and executor,
and serializes event delivery through a single decision queue.
"""

from .dispatcher import BarEvent, EventDispatcher, TickEvent
from .session import TradingSession

__all__ = ["BarEvent", "EventDispatcher", "TickEvent", "TradingSession"]
