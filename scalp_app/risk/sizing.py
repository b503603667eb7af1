"""
Risk-based and fixed position sizing.

Volumes are expressed in units. Every result is a multiple of the
instrument's volume step and at least its minimum volume; degenerate inputs
degrade to the minimum tradable volume instead of raising.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal
from typing import Optional

import structlog

from ..data.models import AccountState, SymbolSpec
from ..models.trading import SizingMode

logger = structlog.get_logger(__name__)

MIN_STOP_DISTANCE_PIPS = 1.0


def stop_distance_pips(
    multiplier: float,
    volatility: float,
    pip_size: float,
    minimum: float = MIN_STOP_DISTANCE_PIPS
) -> float:
    """
    Convert a volatility multiple into a stop distance in pips.

    Distance = max(minimum, multiplier * volatility / pip_size), so a stop
    is never closer than one pip.
    """
    if pip_size <= 0:
        return minimum

    distance = multiplier * volatility / pip_size
    if not math.isfinite(distance):
        return minimum

    return max(minimum, distance)


def normalize_volume(units: float, step: float, rounding: str = ROUND_FLOOR) -> float:
    """
    Snap a volume to a multiple of ``step``.

    Rounds down by default so that a sized trade never risks more than the
    budget. Decimal arithmetic keeps 0.3 / 0.1 from landing on 2.
    """
    step_dec = Decimal(str(step))
    steps = (Decimal(str(units)) / step_dec).to_integral_value(rounding=rounding)
    return float(steps * step_dec)


def min_tradable_volume(spec: SymbolSpec) -> float:
    """Smallest volume the broker accepts, on the step grid."""
    return normalize_volume(spec.min_volume, spec.volume_step, rounding=ROUND_CEILING)


def _is_positive(value) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


@dataclass(frozen=True)
class RiskSizer:
    """Computes trade volume in fixed or risk-percent mode."""

    risk_percent: float = 0.5

    def size(
        self,
        mode: SizingMode,
        stop_distance_pips: float,
        account: AccountState,
        spec: SymbolSpec,
        fixed_volume: float,
    ) -> float:
        """
        Compute the trade volume in units.

        Args:
            mode: FIXED returns ``fixed_volume`` on the step grid; RISK_PERCENT
                sizes so that a stop-out loses ``risk_percent`` of the balance
            stop_distance_pips: Distance to the protective stop in pips
            account: Current account state
            spec: Instrument metadata (step, minimum, pip value)
            fixed_volume: Volume in units used by FIXED mode

        Returns:
            Volume in units, a multiple of ``spec.volume_step`` and at least
            ``spec.min_volume``
        """
        if not _is_positive(spec.volume_step):
            logger.warning(
                "Invalid volume step, falling back to minimum volume",
                symbol=spec.name,
                volume_step=spec.volume_step,
            )
            return spec.min_volume

        if mode == SizingMode.FIXED:
            return self._finalize(fixed_volume, spec)

        risk_amount = account.balance * self.risk_percent / 100.0
        pip_value = spec.pip_value_per_unit

        if pip_value <= 0:
            logger.warning(
                "Non-positive pip value, falling back to minimum volume",
                symbol=spec.name,
                pip_value_per_unit=pip_value,
            )
            return min_tradable_volume(spec)

        raw_units = self._raw_units(risk_amount, stop_distance_pips, pip_value)
        if raw_units is None:
            logger.warning(
                "Non-positive risk size, falling back to minimum volume",
                symbol=spec.name,
                balance=account.balance,
                risk_amount=risk_amount,
                stop_distance_pips=stop_distance_pips,
            )
            return min_tradable_volume(spec)

        volume = self._finalize(raw_units, spec)

        logger.debug(
            "Sized trade by risk",
            symbol=spec.name,
            risk_amount=risk_amount,
            stop_distance_pips=stop_distance_pips,
            raw_units=raw_units,
            volume=volume,
        )

        return volume

    @staticmethod
    def _raw_units(risk_amount: float, stop_distance_pips: float, pip_value: float) -> Optional[float]:
        if stop_distance_pips <= 0 or not math.isfinite(stop_distance_pips):
            return None

        raw_units = risk_amount / (stop_distance_pips * pip_value)
        if not math.isfinite(raw_units) or raw_units <= 0:
            return None

        return raw_units

    @staticmethod
    def _finalize(units: float, spec: SymbolSpec) -> float:
        floor_volume = min_tradable_volume(spec)
        if not math.isfinite(units) or units <= 0:
            return floor_volume

        volume = normalize_volume(units, spec.volume_step)

        if spec.max_volume is not None:
            volume = min(volume, normalize_volume(spec.max_volume, spec.volume_step))

        return max(volume, floor_volume)
