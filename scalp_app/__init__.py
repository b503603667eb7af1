"""
Scalp App - Signal and Risk Decision Engine

A streaming decision engine for single-instrument scalping. Consumes closed
bars and ticks, emits entry intents, position sizes and trailing stop
adjustments for an automated execution layer.
"""

__version__ = "0.1.0"
__author__ = "Scalp App Team"
