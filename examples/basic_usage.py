#!/usr/bin/env python3
"""
Basic Usage Example - Scalp Decision Engine

This script runs the scalp decision engine against a paper ledger with
synthetic EURUSD one-minute bars. It shows how to:
- Build an engine from the instrument configuration
- Wire it to a paper ledger and executor through a trading session
- Feed bar closes and ticks through the event dispatcher
- Inspect opened positions and trailing stop adjustments

Run: python examples/basic_usage.py
"""

import math
import random
from datetime import datetime, timedelta, timezone
from typing import List

from scalp_app.data.models import AccountState, Candle, MarketQuote, SymbolSpec
from scalp_app.engine import ScalpDecisionEngine
from scalp_app.execution.paper import PaperOrderExecutor, PaperPositionLedger
from scalp_app.logging.config import configure_logging
from scalp_app.runtime.dispatcher import BarEvent, EventDispatcher
from scalp_app.runtime.session import TradingSession

PIP = 0.0001


def create_candles(count: int, start: datetime, seed: int = 7) -> List[Candle]:
    """Create a drifting, oscillating series of closed one-minute bars."""
    rng = random.Random(seed)
    candles = []
    prev_close = 1.1000
    for i in range(count):
        close = 1.1000 + 0.0020 * math.sin(i / 6.0) + rng.uniform(-0.0003, 0.0003)
        candles.append(Candle(
            ts=start + timedelta(minutes=i),
            open=prev_close,
            high=max(prev_close, close) + rng.uniform(0, 0.0002),
            low=min(prev_close, close) - rng.uniform(0, 0.0002),
            close=close,
            volume=rng.uniform(50, 150),
        ))
        prev_close = close
    return candles


def print_result(event, result) -> None:
    """Print what a processed event produced."""
    if isinstance(event, BarEvent):
        if result is None:
            return
        if result.succeeded:
            position = result.position
            print(f"📈 {event.now:%H:%M} opened {position.direction.value} {position.volume:.0f} "
                  f"@ {position.entry_price:.5f} SL {position.stop_loss:.5f} TP {position.take_profit:.5f}")
        else:
            print(f"❌ {event.now:%H:%M} {result.message}")
    else:
        for adjustment in result:
            if adjustment.succeeded:
                print(f"   ↳ trailed {adjustment.position.id} stop to {adjustment.position.stop_loss:.5f}")


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("🚀 Scalp Decision Engine - Basic Usage Demo")
    print("=" * 60)

    # Initialize the engine
    print("1. Building the EURUSD engine from instrument configuration...")
    engine = ScalpDecisionEngine.from_config("EURUSD", overrides={"sizing": {"mode": "risk_percent"}})
    stats = engine.get_runtime_stats()
    print(f"   Sizing mode: {stats['sizing_mode']}")
    print(f"   Trading window: {stats['trading_window'][0]}:00-{stats['trading_window'][1]}:59")
    print(f"   Max open positions: {stats['max_open_positions']}")
    print()

    # Paper collaborators
    spec = SymbolSpec(
        pip_size=PIP,
        min_volume=1000.0,
        volume_step=1000.0,
        pip_value_per_unit=PIP,
        name="EURUSD",
    )
    account = AccountState(balance=10000.0)
    ledger = PaperPositionLedger()
    session = TradingSession(engine, spec, ledger, PaperOrderExecutor(ledger))
    dispatcher = EventDispatcher(session, on_result=print_result)

    # Replay bars: each close is followed by two ticks
    print("2. Replaying 180 synthetic bars...")
    candles = create_candles(180, datetime(2024, 3, 4, 8, 0, tzinfo=timezone.utc))
    for i, candle in enumerate(candles):
        quote = MarketQuote(bid=candle.close, ask=candle.close + PIP, pip_size=PIP, ts=candle.ts)
        dispatcher.submit_bar(candle.ts, candles[:i + 1], quote, account)
        for drift in (0.00015, -0.0001):
            bid = candle.close + drift
            dispatcher.submit_tick(MarketQuote(bid=bid, ask=bid + PIP, pip_size=PIP, ts=candle.ts))
        dispatcher.drain()
    print()

    # Final state
    print("3. Final state:")
    open_positions = session.open_positions()
    print(f"   Open positions: {len(open_positions)}")
    for position in open_positions:
        print(f"   {position.id}: {position.direction.value} {position.volume:.0f} stop {position.stop_loss:.5f}")
    executor_stats = session.executor.get_stats()
    print(f"   Executor calls: {executor_stats['execution_count']} ok, {executor_stats['error_count']} failed")
    print()

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
