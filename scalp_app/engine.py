"""
Main decision engine coordinator.

Wires the admission filter, signal detector, risk sizer, entry planner and
trailing stop manager behind two event handlers:

Bar close → Admission → Signal → Sizing → OrderIntent (0 or 1)
Tick      → Trailing stops → StopAdjustment (0 or more)

The engine holds no decision state between events. Open positions are
read from the ledger view passed into each call, and the trailing ratchet
lives on each position's stop loss.
"""

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import EngineConfig, get_default_config
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import AccountState, IndicatorSample, MarketQuote, SymbolSpec
from .data.validators import SnapshotValidator
from .errors import ConfigurationError, DataQualityError
from .filters.admission import AdmissionFilter
from .logging.config import get_trade_logger
from .models.trading import ExecutionResult, OrderIntent, Position, StopAdjustment
from .planning.entry import AdmissionInputs, EntryPlanner, SizingInputs
from .risk.sizing import RiskSizer
from .signals.detector import SignalDetector
from .trailing.manager import TrailingStopManager
from .utils.time import format_market_time

logger = structlog.get_logger(__name__)
trade_logger = get_trade_logger(__name__)


class ScalpDecisionEngine:
    """
    Coordinator for the scalp signal-and-risk engine.

    Every decision is a function of the snapshot handed to the call, so
    failed executions leave nothing to roll back.
    """

    def __init__(self, config: Optional[EngineConfig] = None, symbol: Optional[str] = None) -> None:
        """
        Initialize the engine.

        Raises:
            ConfigurationError: If ``config`` fails validation
        """
        self.config = config or get_default_config()
        self.symbol = symbol
        self.logger = logger

        errors = ConfigValidator.validate_config(self.config.to_dict())
        if errors:
            self.logger.error(
                "Engine configuration rejected",
                symbol=symbol,
                errors=[f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            )
            raise ConfigurationError(f"Invalid engine configuration for {symbol or 'engine'}", errors=errors)

        filters = self.config.filters
        signal = self.config.signal
        stops = self.config.stops

        self.admission = AdmissionFilter(
            start_hour=filters.start_hour,
            end_hour=filters.end_hour,
            max_spread_pips=filters.max_spread_pips,
            max_open_positions=filters.max_open_positions,
            timezone=self.config.session.timezone,
            symbol=symbol,
        )
        self.detector = SignalDetector(oversold=signal.oversold, overbought=signal.overbought)
        self.sizer = RiskSizer(risk_percent=self.config.sizing.risk_percent)
        self.planner = EntryPlanner(
            admission=self.admission,
            detector=self.detector,
            sizer=self.sizer,
            stop_loss_mult=stops.stop_loss_mult,
            take_profit_mult=stops.take_profit_mult,
            label=self.label,
        )
        self.trailing = TrailingStopManager(step_pips=self.config.trailing.step_pips)

        self.logger.info(
            "Scalp decision engine initialized",
            symbol=symbol,
            label=self.label,
            sizing_mode=self.config.sizing.mode.value,
            trailing_enabled=self.config.trailing.enabled,
        )

    @classmethod
    def from_config(
        cls,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None,
        config_dir: Optional[Union[str, Path]] = None
    ) -> "ScalpDecisionEngine":
        """
        Build an engine from defaults, instrument overrides and call-site overrides.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        config = ConfigLoader.create(config_dir).build_engine_config(symbol, overrides)
        return cls(config, symbol=symbol)

    @property
    def label(self) -> str:
        return self.config.session.label

    def owned_positions(self, positions: Iterable[Position], symbol: Optional[str] = None) -> list[Position]:
        """Positions carrying this engine's label, on ``symbol`` when it is known."""
        symbol = symbol or self.symbol
        return [
            p for p in positions
            if p.label == self.label and (not symbol or not p.symbol or p.symbol == symbol)
        ]

    def on_bar(
        self,
        now: datetime,
        sample: IndicatorSample,
        quote: MarketQuote,
        account: AccountState,
        spec: SymbolSpec,
        positions: Iterable[Position],
    ) -> Optional[OrderIntent]:
        """
        Evaluate a closed bar.

        Args:
            now: Bar close time (feed time)
            sample: Indicator values for this and the previous bar
            quote: Quote read at decision time
            account: Account state at decision time
            spec: Instrument metadata
            positions: Current ledger view

        Returns:
            An order intent, or None when admission, signal or data rule it out
        """
        try:
            SnapshotValidator.validate_quote(quote)
            SnapshotValidator.validate_sample(sample)
            SnapshotValidator.validate_symbol(spec)
            SnapshotValidator.validate_account(account)

            owned = self.owned_positions(positions, spec.name)
            admission_inputs = AdmissionInputs(
                now=now,
                open_position_count=len(owned),
                spread_pips=quote.spread_pips,
            )
            sizing_inputs = SizingInputs(
                mode=self.config.sizing.mode,
                account=account,
                spec=spec,
                fixed_volume=spec.lots_to_units(self.config.sizing.fixed_volume_lots),
            )

            return self.planner.plan(quote, sample, admission_inputs, sizing_inputs)

        except DataQualityError as e:
            self.logger.warning(
                "Data quality issue during bar evaluation",
                error=str(e),
                error_type=type(e).__name__,
                symbol=spec.name if spec else self.symbol,
                bar_time=format_market_time(now),
                context=e.context,
            )
            return None

    def on_tick(
        self,
        quote: MarketQuote,
        positions: Iterable[Position],
        symbol: Optional[str] = None
    ) -> list[StopAdjustment]:
        """
        Evaluate a tick for trailing stop adjustments.

        Returns:
            One adjustment per owned position whose stop can be tightened
        """
        if not self.config.trailing.enabled:
            return []

        try:
            SnapshotValidator.validate_quote(quote)
        except DataQualityError as e:
            self.logger.warning(
                "Data quality issue during tick evaluation",
                error=str(e),
                error_type=type(e).__name__,
                symbol=symbol or self.symbol,
                context=e.context,
            )
            return []

        owned = self.owned_positions(positions, symbol)
        return self.trailing.update_all(owned, quote, self.config.trailing.step_pips)

    def on_position_opened(self, position: Position) -> None:
        """Observation callback for a newly opened position."""
        if position.label != self.label:
            return

        trade_logger.info(
            "Position opened",
            position_id=position.id,
            direction=position.direction.value,
            volume=position.volume,
            entry_price=position.entry_price,
            stop_loss=position.stop_loss,
            take_profit=position.take_profit,
        )

    def on_position_closed(self, position: Position, gross_profit: float) -> None:
        """Observation callback for a closed position."""
        if position.label != self.label:
            return

        trade_logger.info(
            "Position closed",
            position_id=position.id,
            direction=position.direction.value,
            gross_profit=gross_profit,
        )

    def on_error(self, result: ExecutionResult) -> None:
        """Observation callback for a failed execution; the engine does not retry."""
        self.logger.error(
            "Execution failed",
            symbol=self.symbol,
            message=result.message,
            error_type=type(result.error).__name__ if result.error else None,
        )

    def get_runtime_stats(self) -> dict[str, Any]:
        """Get a summary of the active configuration."""
        return {
            'symbol': self.symbol,
            'label': self.label,
            'sizing_mode': self.config.sizing.mode.value,
            'max_open_positions': self.config.filters.max_open_positions,
            'trading_window': (self.config.filters.start_hour, self.config.filters.end_hour),
            'trailing_enabled': self.config.trailing.enabled,
        }
