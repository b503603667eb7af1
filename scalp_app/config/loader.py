"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import EngineConfig, get_default_config
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: EngineConfig

    @classmethod
    def create(cls, config_dir: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _load_instruments(self) -> dict[str, Any]:
        instruments_file = self.config_dir / "instruments.yaml"

        if not instruments_file.exists():
            return {}

        with open(instruments_file) as f:
            instruments_config = yaml.safe_load(f) or {}

        return instruments_config.get("instruments") or {}

    def configured_symbols(self) -> list[str]:
        """Symbols that carry instrument-specific overrides."""
        return sorted(self._load_instruments())

    def load_instrument_config(self, symbol: str) -> dict[str, Any]:
        """Load instrument-specific configuration overrides."""
        return self._load_instruments().get(symbol, {}) or {}

    def merge_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. Instrument-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        instrument_config = self.load_instrument_config(symbol)
        config = self._deep_merge(config, instrument_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_engine_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> EngineConfig:
        """
        Merge, validate and build the engine configuration for a symbol.

        Raises:
            ConfigurationError: If any merged parameter is invalid
        """
        config = self.merge_config(symbol, overrides)
        errors = ConfigValidator.validate_config(config)
        if errors:
            logger.error(
                "Configuration validation failed",
                symbol=symbol,
                errors=[f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            )
            raise ConfigurationError(f"Invalid configuration for {symbol}", errors=errors)

        return EngineConfig.from_dict(config)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, Enum):
                    result[field_name] = value.value
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            # An empty YAML section overrides nothing
            if value is None and isinstance(result.get(key), dict):
                continue
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
