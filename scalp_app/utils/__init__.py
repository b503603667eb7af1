"""
Utility functions module.

Time Semantics:
- Market timestamps from data feeds are ALWAYS authoritative
- Wall-clock time is only used as fallback when a feed omits a timestamp
- Trading-hour gates are evaluated in the feed's reference time zone
- Naive datetimes are taken to already be in the feed time zone
"""
