"""
External execution failure classifications.

Raised by order executors when the broker rejects an order or a position
modification. The engine never retries: the failure is converted into a
failed ExecutionResult and reported upward.
"""

from typing import Optional, Dict, Any


class ExecutionError(Exception):
    """Base class for failures reported by the execution collaborator."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class OrderRejectedError(ExecutionError):
    """Market entry order was rejected."""

    def __init__(self, message: str, label: Optional[str] = None,
                 direction: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.label = label
        self.direction = direction


class ModificationRejectedError(ExecutionError):
    """Stop/target modification of an open position was rejected."""

    def __init__(self, message: str, position_id: Optional[str] = None,
                 requested_stop: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.position_id = position_id
        self.requested_stop = requested_stop
