"""
Market snapshot module.

Immutable per-event inputs to the engine (candles, indicator samples,
quotes, account and instrument metadata) and their validation.
"""
