"""
Configuration error raised when engine parameters fail validation.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..config.validation import ValidationError


class ConfigurationError(Exception):
    """Engine configuration is invalid; raised before any event is processed."""

    def __init__(self, message: str, errors: Optional[list["ValidationError"]] = None):
        super().__init__(message)
        self.errors = errors or []
        self.recoverable = False

    def __str__(self) -> str:
        base = super().__str__()
        if not self.errors:
            return base
        details = "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in self.errors)
        return f"{base}: {details}"
