"""
Admission filter module.

Gates whether a new entry may be attempted on a bar.
"""

from .admission import AdmissionFilter

__all__ = ["AdmissionFilter"]
