#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from scalp_app.config.loader import ConfigLoader
from scalp_app.errors import ConfigurationError


def validate_symbol(loader: ConfigLoader, symbol: str, overrides=None) -> bool:
    """Build the engine configuration for one symbol and report the outcome."""
    try:
        config = loader.build_engine_config(symbol, overrides)
    except ConfigurationError as e:
        print(f"❌ {symbol}: {len(e.errors)} validation errors")
        for error in e.errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        return False

    filters = config.filters
    print(
        f"✅ {symbol}: mode={config.sizing.mode.value} "
        f"hours={filters.start_hour}-{filters.end_hour} "
        f"max_spread={filters.max_spread_pips} "
        f"trailing={'on' if config.trailing.enabled else 'off'}"
    )
    return True


def main():
    """Main validation function."""
    config_dir = sys.argv[1] if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating configuration in {loader.config_dir}...")

    # Unknown symbols fall back to defaults
    symbols = loader.configured_symbols() + ["UNKNOWN-INSTRUMENT"]
    all_valid = all([validate_symbol(loader, symbol) for symbol in symbols])

    print("\n📋 Testing call-site overrides...")
    all_valid &= validate_symbol(
        loader, "EURUSD", {"sizing": {"mode": "risk_percent", "risk_percent": 1.0}}
    )

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
