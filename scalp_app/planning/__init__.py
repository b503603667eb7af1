"""
Entry planning module.

Combines admission, signal detection and sizing into at most one order
intent per closed bar.
"""

from .entry import AdmissionInputs, EntryPlanner, SizingInputs

__all__ = ["AdmissionInputs", "EntryPlanner", "SizingInputs"]
