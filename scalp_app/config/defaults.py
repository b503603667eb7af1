"""Default configuration parameters for the scalp decision engine."""

from dataclasses import asdict, dataclass, fields
from typing import Any

from ..models.trading import SizingMode


@dataclass(frozen=True)
class SizingParams:
    """Trade volume parameters."""
    mode: SizingMode = SizingMode.FIXED              # Fixed volume vs risk percent
    fixed_volume_lots: float = 0.01                  # Used when mode is FIXED
    risk_percent: float = 0.5                        # % of balance risked per trade


@dataclass(frozen=True)
class SignalParams:
    """Indicator periods and momentum band."""
    fast_trend_period: int = 8                       # Fast EMA
    slow_trend_period: int = 21                      # Slow EMA
    momentum_period: int = 14                        # RSI
    overbought: float = 70.0
    oversold: float = 30.0
    volatility_period: int = 14                      # ATR


@dataclass(frozen=True)
class StopParams:
    """Stop-loss and take-profit distances as volatility multiples."""
    stop_loss_mult: float = 1.2                      # SL = mult x ATR
    take_profit_mult: float = 1.0                    # TP = mult x ATR


@dataclass(frozen=True)
class FilterParams:
    """Admission filter limits."""
    max_spread_pips: float = 2.0
    start_hour: int = 0                              # Inclusive, feed time zone
    end_hour: int = 23                               # Inclusive, feed time zone
    max_open_positions: int = 3


@dataclass(frozen=True)
class TrailingParams:
    """Trailing stop parameters."""
    enabled: bool = True
    step_pips: float = 5.0


@dataclass(frozen=True)
class SessionParams:
    """Run identity parameters."""
    label: str = "ScalpIst"                          # Tags positions owned by this engine
    timezone: str = "UTC"                            # Feed reference time zone


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration."""
    sizing: SizingParams
    signal: SignalParams
    stops: StopParams
    filters: FilterParams
    trailing: TrailingParams
    session: SessionParams

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "EngineConfig":
        """Build a configuration from a merged config dictionary.

        Unknown keys are ignored; missing keys keep their defaults.
        """
        sections = {
            "sizing": SizingParams,
            "signal": SignalParams,
            "stops": StopParams,
            "filters": FilterParams,
            "trailing": TrailingParams,
            "session": SessionParams,
        }
        kwargs = {}
        for name, params_cls in sections.items():
            values = config.get(name) or {}
            known = {f.name for f in fields(params_cls)}
            section = {k: v for k, v in values.items() if k in known}
            if name == "sizing" and "mode" in section and not isinstance(section["mode"], SizingMode):
                section["mode"] = SizingMode(section["mode"])
            kwargs[name] = params_cls(**section)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dictionary, enums as their values."""
        config = asdict(self)
        config["sizing"]["mode"] = getattr(self.sizing.mode, "value", self.sizing.mode)
        return config


def get_default_config() -> EngineConfig:
    """Get the default configuration instance."""
    return EngineConfig(
        sizing=SizingParams(),
        signal=SignalParams(),
        stops=StopParams(),
        filters=FilterParams(),
        trailing=TrailingParams(),
        session=SessionParams(),
    )
