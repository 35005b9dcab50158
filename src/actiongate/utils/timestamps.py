"""
Timestamp utilities used across actiongate:
- ISO-8601 timestamp generator
- UTC datetime helpers
"""

from __future__ import annotations
import datetime as _dt


def utc_now() -> _dt.datetime:
    """Return a timezone-aware UTC datetime."""
    return _dt.datetime.now(tz=_dt.timezone.utc)


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string with Z suffix."""
    return utc_now().isoformat().replace("+00:00", "Z")
