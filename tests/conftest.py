"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone

from scalp_app.data.models import AccountState, Candle, IndicatorSample, MarketQuote, SymbolSpec
from scalp_app.models.trading import Position, TradeDirection


@pytest.fixture
def bar_time() -> datetime:
    """Bar close time inside the default trading window."""
    return datetime(2024, 3, 4, 10, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def eurusd_spec() -> SymbolSpec:
    """EURUSD-like instrument, volumes in units."""
    return SymbolSpec(
        pip_size=0.0001,
        min_volume=1000.0,
        volume_step=1000.0,
        pip_value_per_unit=0.0001,
        name="EURUSD",
    )


@pytest.fixture
def account() -> AccountState:
    return AccountState(balance=10000.0, currency="USD")


@pytest.fixture
def tight_quote() -> MarketQuote:
    """Quote with a one-pip spread."""
    return MarketQuote(bid=1.1000, ask=1.1001, pip_size=0.0001)


@pytest.fixture
def long_sample() -> IndicatorSample:
    """Fast trend crossing above slow with momentum mid-band."""
    return IndicatorSample(
        fast_trend=1.0010,
        slow_trend=1.0008,
        fast_trend_prev=1.0000,
        slow_trend_prev=1.0005,
        momentum=45.0,
        volatility=0.0005,
    )


@pytest.fixture
def short_sample() -> IndicatorSample:
    """Fast trend crossing below slow with momentum mid-band."""
    return IndicatorSample(
        fast_trend=1.0004,
        slow_trend=1.0008,
        fast_trend_prev=1.0010,
        slow_trend_prev=1.0005,
        momentum=55.0,
        volatility=0.0005,
    )


@pytest.fixture
def flat_sample() -> IndicatorSample:
    """No crossover."""
    return IndicatorSample(
        fast_trend=1.0010,
        slow_trend=1.0008,
        fast_trend_prev=1.0009,
        slow_trend_prev=1.0007,
        momentum=50.0,
        volatility=0.0005,
    )


@pytest.fixture
def make_position():
    """Factory for ledger positions."""
    def _make(
        direction: TradeDirection = TradeDirection.LONG,
        stop_loss=1.0950,
        take_profit=1.1050,
        position_id: str = "P-1",
        label: str = "ScalpIst",
        symbol: str = "EURUSD",
        entry_price: float = 1.1000,
        volume: float = 1000.0,
    ) -> Position:
        return Position(
            id=position_id,
            direction=direction,
            entry_price=entry_price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            volume=volume,
            label=label,
            opened_at=datetime(2024, 3, 4, 9, 0, 0, tzinfo=timezone.utc),
            symbol=symbol,
        )
    return _make


@pytest.fixture
def make_candles():
    """Factory for closed one-minute candles from a list of closes."""
    def _make(closes, spread: float = 0.0002, start=None) -> list[Candle]:
        start = start or datetime(2024, 3, 4, 8, 0, 0, tzinfo=timezone.utc)
        candles = []
        prev_close = closes[0]
        for i, close in enumerate(closes):
            candles.append(Candle(
                ts=start + timedelta(minutes=i),
                open=prev_close,
                high=max(prev_close, close) + spread / 2,
                low=min(prev_close, close) - spread / 2,
                close=close,
                volume=100.0,
                is_closed=True,
            ))
            prev_close = close
        return candles
    return _make
