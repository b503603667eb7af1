"""
Engine configuration module.

Frozen-dataclass defaults, YAML instrument overrides and validation.
"""
