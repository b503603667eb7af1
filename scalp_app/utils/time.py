"""
Time semantics utilities for market vs wall-clock time handling.

This module provides centralized time handling so that the trading-hour
gate always sees the hour of day in the feed's reference time zone.
"""

from datetime import datetime, timezone, tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def get_market_time(market_ts: Optional[datetime] = None) -> datetime:
    """
    Get the current market time, preferring market timestamp over wall-clock time.

    Args:
        market_ts: Optional market timestamp from data feed

    Returns:
        Market time as datetime, falling back to wall-clock UTC if unavailable
    """
    if market_ts is not None:
        return market_ts

    # Fallback to wall-clock time when market time unavailable
    return datetime.now(timezone.utc)


@lru_cache(maxsize=32)
def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve a time zone name to a tzinfo.

    Raises:
        ValueError: If the name is not a known IANA zone
    """
    if name.upper() in ("UTC", "Z", "ETC/UTC"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {name}") from e


def to_feed_time(ts: datetime, tz_name: str = "UTC") -> datetime:
    """
    Express a timestamp in the feed's reference time zone.

    Naive timestamps are returned unchanged.
    """
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(resolve_timezone(tz_name))


def feed_hour(ts: datetime, tz_name: str = "UTC") -> int:
    """Hour of day (0-23) of ``ts`` in the feed time zone."""
    return to_feed_time(ts, tz_name).hour


def format_market_time(market_ts: Optional[datetime]) -> Optional[str]:
    """
    Format market timestamp for logging.

    Args:
        market_ts: Market timestamp to format

    Returns:
        ISO8601 formatted string, None if no timestamp
    """
    if market_ts is None:
        return None
    return market_ts.isoformat()
