"""
Snapshot validation for event inputs.

Checks that the values handed to the engine for a bar or tick are usable
before any decision is derived from them. Failures raise a
DataQualityError subclass, which the engine catches at the event boundary.
"""

import math
from typing import Optional

from ..errors import MalformedDataError, MissingDataError
from .models import AccountState, IndicatorSample, MarketQuote, SymbolSpec


def _require_finite(value: Optional[float], field: str, data_type: str) -> None:
    if value is None:
        raise MissingDataError(f"{data_type}.{field} is missing", data_type=data_type)
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        raise MalformedDataError(
            f"{data_type}.{field} must be a finite number",
            field=field,
            value=value,
            context={"data_type": data_type},
        )


class SnapshotValidator:
    """Validates per-event market snapshots."""

    @staticmethod
    def validate_sample(sample: Optional[IndicatorSample]) -> None:
        """Validate indicator values for a closed bar."""
        if sample is None:
            raise MissingDataError("No indicator sample provided", data_type="indicator_sample")

        for field in (
            "fast_trend", "slow_trend", "fast_trend_prev",
            "slow_trend_prev", "momentum", "volatility",
        ):
            _require_finite(getattr(sample, field), field, "indicator_sample")

    @staticmethod
    def validate_quote(quote: Optional[MarketQuote]) -> None:
        """Validate a bid/ask quote."""
        if quote is None:
            raise MissingDataError("No market quote provided", data_type="market_quote")

        for field in ("bid", "ask", "pip_size"):
            _require_finite(getattr(quote, field), field, "market_quote")

        if quote.pip_size <= 0:
            raise MalformedDataError(
                "Pip size must be positive", field="pip_size", value=quote.pip_size
            )
        if quote.bid <= 0 or quote.ask <= 0:
            raise MalformedDataError(
                "Quote prices must be positive",
                field="bid" if quote.bid <= 0 else "ask",
                value=quote.bid if quote.bid <= 0 else quote.ask,
            )
        if quote.ask < quote.bid:
            raise MalformedDataError(
                "Crossed quote: ask below bid",
                field="ask",
                value=quote.ask,
                context={"bid": quote.bid, "ask": quote.ask},
            )

    @staticmethod
    def validate_symbol(spec: Optional[SymbolSpec]) -> None:
        """Validate static instrument metadata.

        A non-positive pip value is left alone: sizing falls back to the
        minimum volume for it.
        """
        if spec is None:
            raise MissingDataError("No symbol spec provided", data_type="symbol_spec")

        for field in ("pip_size", "min_volume", "volume_step"):
            _require_finite(getattr(spec, field), field, "symbol_spec")
            if getattr(spec, field) <= 0:
                raise MalformedDataError(
                    f"symbol_spec.{field} must be positive",
                    field=field,
                    value=getattr(spec, field),
                )

    @staticmethod
    def validate_account(account: Optional[AccountState]) -> None:
        """Validate account state; a non-positive balance is allowed."""
        if account is None:
            raise MissingDataError("No account state provided", data_type="account_state")
        _require_finite(account.balance, "balance", "account_state")
