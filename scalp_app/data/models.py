"""
Canonical data models for market snapshots.

This module defines immutable data structures handed to the engine per
event: closed candles, indicator samples, quotes, account and instrument
metadata. The engine only reads them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Candle:
    """Closed bar data with UTC timestamps."""
    ts: datetime        # UTC market timestamp
    open: float        # Opening price
    high: float        # High price
    low: float         # Low price
    close: float       # Closing price
    volume: float = 0.0
    is_closed: bool = True


@dataclass(frozen=True)
class IndicatorSample:
    """Indicator values for the latest closed bar and the bar before it."""
    fast_trend: float
    slow_trend: float
    fast_trend_prev: float
    slow_trend_prev: float
    momentum: float
    volatility: float


@dataclass(frozen=True)
class MarketQuote:
    """Current bid/ask for the instrument; never cached across events."""
    bid: float
    ask: float
    pip_size: float
    ts: Optional[datetime] = None

    @property
    def spread(self) -> float:
        """Bid-ask spread in price units."""
        return self.ask - self.bid

    @property
    def spread_pips(self) -> float:
        """Bid-ask spread in pips."""
        return self.spread / self.pip_size

    @property
    def mid_price(self) -> float:
        """Mid price between bid and ask."""
        return (self.bid + self.ask) / 2.0


@dataclass(frozen=True)
class AccountState:
    """Account balance as of the decision instant."""
    balance: float
    currency: str = "USD"


@dataclass(frozen=True)
class SymbolSpec:
    """Static trading metadata for one instrument."""
    pip_size: float
    min_volume: float                   # Minimum tradable volume in units
    volume_step: float                  # Volume increment in units
    pip_value_per_unit: float           # Account-currency value of one pip per unit
    name: str = ""
    lot_size: float = 100000.0          # Units per lot
    max_volume: Optional[float] = None  # Broker cap in units, None if uncapped

    def lots_to_units(self, lots: float) -> float:
        """Convert a quantity in lots to volume in units."""
        return lots * self.lot_size
