"""
Centralized logging configuration for the Scalp App decision engine.

Admission gates, emitted intents, stop adjustments and position
observations all log through the loggers defined here so that every
decision leaves a structured audit record.
"""
import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Route structlog through stdlib logging.

    Args:
        level: Logging level name. Gate passes log at DEBUG, gate
            failures and trade events at INFO.
        format_json: One JSON object per line instead of console output
        stream: Output stream, stdout by default
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=stream or sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if format_json else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structlog logger; ``name`` is typically ``__name__``."""
    return structlog.get_logger(name)


def get_gating_logger(name: str) -> FilteringBoundLogger:
    """Logger for admission gate decisions, bound to the gating subsystem."""
    return get_logger(name).bind(subsystem="gating", audit_trail=True)


def get_trade_logger(name: str) -> FilteringBoundLogger:
    """
    Logger for trade lifecycle events.

    Entry intents, stop adjustments and position open/close observations
    go through it, bound to the trading subsystem.
    """
    return get_logger(name).bind(subsystem="trading", audit_trail=True)


def log_gate_decision(
    logger: FilteringBoundLogger,
    gate_name: str,
    passed: bool,
    symbol: Optional[str],
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log one admission gate outcome.

    Passes go to DEBUG so a normal INFO run only records rejections.
    """
    log = logger.debug if passed else logger.info
    log(
        "Gate passed" if passed else "Gate failed",
        gate_name=gate_name,
        gate_result="PASS" if passed else "FAIL",
        symbol=symbol,
        reason=reason,
        **({"context": context} if context else {}),
    )
