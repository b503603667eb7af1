"""
Trading session: one engine, one instrument, one ledger and executor.

Turns engine decisions into executor calls and feeds the resulting
observations back to the engine. External failures are logged and
returned; nothing is retried.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

import structlog

from ..data.models import AccountState, Candle, MarketQuote, SymbolSpec
from ..engine import ScalpDecisionEngine
from ..errors import InsufficientDataError
from ..execution.base import BaseOrderExecutor, PositionLedger
from ..execution.paper import PaperPositionLedger
from ..metrics.snapshot import IndicatorSnapshotBuilder, MarketSnapshotProvider
from ..models.trading import ExecutionResult, Position

logger = structlog.get_logger(__name__)


class TradingSession:
    """Drives a ScalpDecisionEngine from bar and tick events."""

    def __init__(
        self,
        engine: ScalpDecisionEngine,
        spec: SymbolSpec,
        ledger: PositionLedger,
        executor: BaseOrderExecutor,
        provider: Optional[MarketSnapshotProvider] = None,
    ):
        self.engine = engine
        self.spec = spec
        self.ledger = ledger
        self.executor = executor
        self.provider = provider or IndicatorSnapshotBuilder(engine.config.signal)

    def open_positions(self) -> list[Position]:
        return self.ledger.find_all(self.engine.label, self.spec.name)

    def process_bar(
        self,
        now: datetime,
        candles: Sequence[Candle],
        quote: MarketQuote,
        account: AccountState,
    ) -> Optional[ExecutionResult]:
        """
        Handle a bar-close event.

        Returns:
            The execution result if an intent was submitted, else None
        """
        try:
            sample = self.provider.build(candles)
        except InsufficientDataError as e:
            logger.debug(
                "Skipping bar, indicator history still warming up",
                symbol=self.spec.name,
                required=e.required_count,
                available=e.available_count,
            )
            return None

        intent = self.engine.on_bar(now, sample, quote, account, self.spec, self.open_positions())
        if intent is None:
            return None

        result = self.executor.execute(intent, quote, now)
        if result.succeeded and result.position is not None:
            self.engine.on_position_opened(result.position)
        else:
            self.engine.on_error(result)

        return result

    def process_tick(self, quote: MarketQuote) -> list[ExecutionResult]:
        """
        Handle a tick event.

        Paper ledgers are checked for stop/target hits first; then every
        proposed stop adjustment is sent to the executor.
        """
        if isinstance(self.ledger, PaperPositionLedger):
            for position, profit in self.ledger.check_exits(quote):
                self.notify_closed(position, profit)

        adjustments = self.engine.on_tick(quote, self.open_positions(), self.spec.name)

        results = []
        for adjustment in adjustments:
            result = self.executor.modify(adjustment)
            if not result.succeeded:
                self.engine.on_error(result)
            results.append(result)

        return results

    def notify_closed(self, position: Position, gross_profit: float) -> None:
        """Report a closure observed by the ledger or broker."""
        self.engine.on_position_closed(position, gross_profit)
