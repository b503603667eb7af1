"""Indicator sample construction from closed candle history"""

from collections.abc import Sequence
from typing import Protocol

from ..config.defaults import SignalParams
from ..data.models import Candle, IndicatorSample
from ..errors import InsufficientDataError
from .indicators import atr_series, ema_series, rsi_series


class MarketSnapshotProvider(Protocol):
    """Anything that turns closed-bar history into an IndicatorSample."""

    def build(self, candles: Sequence[Candle]) -> IndicatorSample:
        ...


class IndicatorSnapshotBuilder:
    """
    Builds IndicatorSample values from closed candles.

    Trend: fast/slow EMA of closes. Momentum: RSI of closes. Volatility:
    exponentially smoothed ATR. Current values come from the last closed
    candle, previous values from the one before it.
    """

    def __init__(self, params: SignalParams):
        self.params = params

    @property
    def required_bars(self) -> int:
        """Closed candles needed before a sample can be produced."""
        return max(
            self.params.fast_trend_period + 1,
            self.params.slow_trend_period + 1,
            self.params.volatility_period + 1,
            self.params.momentum_period + 2,
        )

    def build(self, candles: Sequence[Candle]) -> IndicatorSample:
        """
        Compute the indicator sample for the latest closed candle.

        Raises:
            InsufficientDataError: If fewer than ``required_bars`` closed candles
        """
        closed = [c for c in candles if c.is_closed]
        if len(closed) < self.required_bars:
            raise InsufficientDataError(
                "Not enough closed bars for indicator sample",
                required_count=self.required_bars,
                available_count=len(closed),
            )

        closes = [c.close for c in closed]
        fast = ema_series(closes, self.params.fast_trend_period)
        slow = ema_series(closes, self.params.slow_trend_period)
        rsi = rsi_series(closes, self.params.momentum_period)
        atr = atr_series(closed, self.params.volatility_period)

        return IndicatorSample(
            fast_trend=fast[-1],
            slow_trend=slow[-1],
            fast_trend_prev=fast[-2],
            slow_trend_prev=slow[-2],
            momentum=rsi[-1],
            volatility=atr[-1],
        )
