"""
Trading data models and contracts module.

Immutable data structures for positions, order intents, stop adjustments
and execution results. Follows functional programming principles with
frozen dataclasses.
"""
