"""
Execution collaborator module.

Contracts for the order executor and position ledger the engine talks to,
plus an in-memory paper implementation.
"""

from .base import BaseOrderExecutor, PositionLedger
from .paper import PaperOrderExecutor, PaperPositionLedger

__all__ = [
    "BaseOrderExecutor",
    "PaperOrderExecutor",
    "PaperPositionLedger",
    "PositionLedger",
]
