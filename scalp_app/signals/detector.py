"""Trend crossover signal detection with a momentum band filter."""

from dataclasses import dataclass

from ..data.models import IndicatorSample
from ..models.trading import SignalType


@dataclass(frozen=True)
class SignalDetector:
    """
    Detects fast/slow trend crossovers on the latest closed bar.

    A crossover counts only if it happened on this bar: the fast trend was
    at or below (above) the slow trend on the previous bar and is strictly
    above (below) it now. Momentum must sit strictly inside the
    (oversold, overbought) band for either direction; both sides share the
    same band.

    If both conditions hold at once, LONG wins.
    """

    oversold: float = 30.0
    overbought: float = 70.0

    def detect(self, sample: IndicatorSample) -> SignalType:
        """Classify the sample as a LONG, SHORT or NONE signal."""
        if not self.momentum_in_band(sample.momentum):
            return SignalType.NONE

        if self.crossed_above(sample):
            return SignalType.LONG

        if self.crossed_below(sample):
            return SignalType.SHORT

        return SignalType.NONE

    def momentum_in_band(self, momentum: float) -> bool:
        return self.oversold < momentum < self.overbought

    @staticmethod
    def crossed_above(sample: IndicatorSample) -> bool:
        return (
            sample.fast_trend_prev <= sample.slow_trend_prev
            and sample.fast_trend > sample.slow_trend
        )

    @staticmethod
    def crossed_below(sample: IndicatorSample) -> bool:
        return (
            sample.fast_trend_prev >= sample.slow_trend_prev
            and sample.fast_trend < sample.slow_trend
        )
