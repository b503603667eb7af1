"""
Logging configuration and utilities for the Scalp App decision engine.
"""
from .config import (
    configure_logging,
    get_gating_logger,
    get_logger,
    get_trade_logger,
    log_gate_decision,
)

__all__ = [
    "configure_logging",
    "get_gating_logger",
    "get_logger",
    "get_trade_logger",
    "log_gate_decision",
]
