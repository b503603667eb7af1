"""
Entry signal detection module.

Trend crossover confirmed by a momentum band, evaluated once per closed bar.
"""

from .detector import SignalDetector

__all__ = ["SignalDetector"]
