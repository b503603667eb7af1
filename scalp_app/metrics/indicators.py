"""EMA, RSI and ATR series over closed candles"""

from collections.abc import Sequence
from typing import Optional

from ..data.models import Candle


def calculate_true_range(current: Candle, previous: Optional[Candle] = None) -> float:
    """
    Calculate True Range for a single candle

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))

    Args:
        current: Current candle
        previous: Previous candle (None for first candle)

    Returns:
        True Range value
    """
    if previous is None:
        # First candle case - use high-low range
        return current.high - current.low

    range_hl = current.high - current.low
    range_hc = abs(current.high - previous.close)
    range_lc = abs(current.low - previous.close)

    return max(range_hl, range_hc, range_lc)


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """
    Exponential moving average, one value per input

    Seeded with the first input; alpha = 2 / (period + 1).

    Args:
        values: Input series in chronological order
        period: EMA period

    Returns:
        EMA values aligned with ``values``
    """
    if not values:
        return []

    alpha = 2.0 / (period + 1)
    result = [float(values[0])]
    for value in values[1:]:
        result.append(result[-1] + alpha * (value - result[-1]))
    return result


def rsi_series(closes: Sequence[float], period: int = 14) -> list[float]:
    """
    Relative Strength Index with Wilder smoothing

    The first value uses simple averages of the first ``period`` changes.

    Args:
        closes: Close prices in chronological order
        period: RSI period

    Returns:
        RSI values aligned with ``closes[period:]``, empty if insufficient data
    """
    if len(closes) <= period:
        return []

    changes = [closes[i] - closes[i - 1] for i in range(1, len(closes))]
    gains = [max(change, 0.0) for change in changes]
    losses = [max(-change, 0.0) for change in changes]

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    result = [_rsi_value(avg_gain, avg_loss)]

    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


def atr_series(candles: Sequence[Candle], period: int = 14) -> list[float]:
    """
    Average True Range smoothed with an exponential moving average

    Args:
        candles: Candles in chronological order
        period: ATR period

    Returns:
        ATR values aligned with ``candles``
    """
    true_ranges = []
    for i, candle in enumerate(candles):
        previous = candles[i - 1] if i > 0 else None
        true_ranges.append(calculate_true_range(candle, previous))

    return ema_series(true_ranges, period)
