"""
Error classification for the decision engine.

Structured exception hierarchy separating bad event data (skipped per
event), invalid configuration (rejected before the run starts) and
external execution failures (reported upward, never retried).
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .configuration import ConfigurationError
from .execution import (
    ExecutionError,
    OrderRejectedError,
    ModificationRejectedError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # Configuration
    "ConfigurationError",
    # External Execution Failures
    "ExecutionError",
    "OrderRejectedError",
    "ModificationRejectedError",
]
