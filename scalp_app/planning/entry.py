"""Entry planning: admission, signal, stop/target prices and size."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import structlog

from ..data.models import AccountState, IndicatorSample, MarketQuote, SymbolSpec
from ..filters.admission import AdmissionFilter
from ..logging.config import get_trade_logger
from ..models.trading import OrderIntent, SignalType, SizingMode, TradeDirection
from ..risk.sizing import RiskSizer, stop_distance_pips
from ..signals.detector import SignalDetector

logger = structlog.get_logger(__name__)
trade_logger = get_trade_logger(__name__)


@dataclass(frozen=True)
class AdmissionInputs:
    """Per-bar inputs to the admission filter."""
    now: datetime
    open_position_count: int
    spread_pips: Optional[float] = None  # Derived from the quote when omitted


@dataclass(frozen=True)
class SizingInputs:
    """Per-bar inputs to the risk sizer."""
    mode: SizingMode
    account: AccountState
    spec: SymbolSpec
    fixed_volume: float  # Units


class EntryPlanner:
    """
    Produces zero or one order intent per closed bar.

    Long entries put the stop ``sl_pips`` below and the target ``tp_pips``
    above the bid; short entries mirror this around the ask. Both distances
    come from the bar's volatility and are at least one pip.
    """

    def __init__(
        self,
        admission: AdmissionFilter,
        detector: SignalDetector,
        sizer: RiskSizer,
        stop_loss_mult: float = 1.2,
        take_profit_mult: float = 1.0,
        label: str = "ScalpIst",
    ):
        self.admission = admission
        self.detector = detector
        self.sizer = sizer
        self.stop_loss_mult = stop_loss_mult
        self.take_profit_mult = take_profit_mult
        self.label = label

    def plan(
        self,
        quote: MarketQuote,
        sample: IndicatorSample,
        filter_inputs: AdmissionInputs,
        sizing: SizingInputs,
    ) -> Optional[OrderIntent]:
        """Return an order intent for this bar, or None."""
        spread_pips = filter_inputs.spread_pips
        if spread_pips is None:
            spread_pips = quote.spread_pips

        if not self.admission.allow(filter_inputs.now, spread_pips, filter_inputs.open_position_count):
            return None

        signal = self.detector.detect(sample)
        logger.debug(
            "Signal evaluated",
            symbol=sizing.spec.name,
            signal=signal.value,
            fast_trend=sample.fast_trend,
            slow_trend=sample.slow_trend,
            momentum=sample.momentum,
        )

        if signal == SignalType.NONE:
            return None

        pip = quote.pip_size
        sl_pips = stop_distance_pips(self.stop_loss_mult, sample.volatility, pip)
        tp_pips = stop_distance_pips(self.take_profit_mult, sample.volatility, pip)

        if signal == SignalType.LONG:
            direction = TradeDirection.LONG
            stop_loss = quote.bid - sl_pips * pip
            take_profit = quote.bid + tp_pips * pip
        else:
            direction = TradeDirection.SHORT
            stop_loss = quote.ask + sl_pips * pip
            take_profit = quote.ask - tp_pips * pip

        volume = self.sizer.size(
            sizing.mode, sl_pips, sizing.account, sizing.spec, sizing.fixed_volume
        )

        intent = OrderIntent(
            direction=direction,
            volume=volume,
            stop_loss_price=stop_loss,
            take_profit_price=take_profit,
            label=self.label,
            symbol=sizing.spec.name,
        )

        trade_logger.info(
            "Entry intent planned",
            sl_pips=sl_pips,
            tp_pips=tp_pips,
            bid=quote.bid,
            ask=quote.ask,
            **intent.to_dict(),
        )

        return intent
