"""
Position sizing module.

Translates a stop distance and a risk budget into a tradable volume.
"""

from .sizing import RiskSizer, normalize_volume, stop_distance_pips

__all__ = ["RiskSizer", "normalize_volume", "stop_distance_pips"]
