"""Reference indicator provider: trend, momentum and volatility series from candles"""

from .indicators import atr_series, calculate_true_range, ema_series, rsi_series
from .snapshot import IndicatorSnapshotBuilder, MarketSnapshotProvider

__all__ = [
    "IndicatorSnapshotBuilder",
    "MarketSnapshotProvider",
    "atr_series",
    "calculate_true_range",
    "ema_series",
    "rsi_series",
]
