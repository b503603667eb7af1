"""
Trailing stop module.

Ratchets protective stops behind favorable price movement, per tick.
"""

from .manager import TrailingStopManager

__all__ = ["TrailingStopManager"]
