"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any

from ..models.trading import SizingMode
from ..utils.time import resolve_timezone


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_positive_number(params: dict[str, Any], field: str, errors: list[ValidationError]) -> None:
    if field in params:
        value = params[field]
        if not _is_number(value) or value <= 0:
            errors.append(ValidationError(
                field=field,
                message="Must be a positive number",
                value=value
            ))


def _check_positive_int(params: dict[str, Any], field: str, errors: list[ValidationError]) -> None:
    if field in params:
        value = params[field]
        if not _is_int(value) or value <= 0:
            errors.append(ValidationError(
                field=field,
                message="Must be a positive integer",
                value=value
            ))


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_sizing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate sizing parameters."""
        errors = []

        if "mode" in params:
            value = params["mode"]
            allowed = [m.value for m in SizingMode]
            mode_value = value.value if isinstance(value, SizingMode) else value
            if mode_value not in allowed:
                errors.append(ValidationError(
                    field="mode",
                    message=f"Must be one of {allowed}",
                    value=value
                ))

        _check_positive_number(params, "fixed_volume_lots", errors)

        if "risk_percent" in params:
            value = params["risk_percent"]
            if not _is_number(value) or value <= 0 or value > 100:
                errors.append(ValidationError(
                    field="risk_percent",
                    message="Must be a positive number no greater than 100",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator periods and the momentum band."""
        errors = []

        for field in ("fast_trend_period", "slow_trend_period", "momentum_period", "volatility_period"):
            _check_positive_int(params, field, errors)

        for field in ("overbought", "oversold"):
            if field in params:
                value = params[field]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        overbought = params.get("overbought")
        oversold = params.get("oversold")
        if _is_number(overbought) and _is_number(oversold) and oversold >= overbought:
            errors.append(ValidationError(
                field="oversold",
                message="Must be below overbought",
                value=oversold
            ))

        return errors

    @staticmethod
    def validate_stop_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate stop/target volatility multipliers."""
        errors = []

        _check_positive_number(params, "stop_loss_mult", errors)
        _check_positive_number(params, "take_profit_mult", errors)

        return errors

    @staticmethod
    def validate_filter_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate admission filter parameters."""
        errors = []

        if "max_spread_pips" in params:
            value = params["max_spread_pips"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="max_spread_pips",
                    message="Must be a non-negative number",
                    value=value
                ))

        for field in ("start_hour", "end_hour"):
            if field in params:
                value = params[field]
                if not _is_int(value) or value < 0 or value > 23:
                    errors.append(ValidationError(
                        field=field,
                        message="Must be an integer hour between 0 and 23",
                        value=value
                    ))

        # An inverted window admits nothing; reject it rather than wrapping midnight
        start_hour = params.get("start_hour")
        end_hour = params.get("end_hour")
        if _is_int(start_hour) and _is_int(end_hour) and start_hour > end_hour:
            errors.append(ValidationError(
                field="start_hour",
                message="Trading window is empty: start_hour must not exceed end_hour",
                value=start_hour
            ))

        if "max_open_positions" in params:
            value = params["max_open_positions"]
            if not _is_int(value) or value < 1:
                errors.append(ValidationError(
                    field="max_open_positions",
                    message="Must be an integer of at least 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_trailing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate trailing stop parameters."""
        errors = []

        if "enabled" in params:
            value = params["enabled"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="enabled",
                    message="Must be a boolean",
                    value=value
                ))

        _check_positive_number(params, "step_pips", errors)

        return errors

    @staticmethod
    def validate_session_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate run identity parameters."""
        errors = []

        if "label" in params:
            value = params["label"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="label",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "timezone" in params:
            value = params["timezone"]
            try:
                if not isinstance(value, str):
                    raise ValueError(value)
                resolve_timezone(value)
            except ValueError:
                errors.append(ValidationError(
                    field="timezone",
                    message="Must be a known IANA time zone name",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        sections = {
            "sizing": ConfigValidator.validate_sizing_params,
            "signal": ConfigValidator.validate_signal_params,
            "stops": ConfigValidator.validate_stop_params,
            "filters": ConfigValidator.validate_filter_params,
            "trailing": ConfigValidator.validate_trailing_params,
            "session": ConfigValidator.validate_session_params,
        }

        for name, validate in sections.items():
            if name not in config:
                continue
            params = config[name]
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a mapping of parameters",
                    value=params
                ))
                continue
            errors.extend(validate(params))

        return errors
