"""
Time helpers.

All timestamps in the system are timezone-aware UTC. Naive datetimes are
rejected by the models, so use these helpers rather than ``datetime.now()``.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def to_iso_utc(value: datetime) -> str:
    """Format ``value`` as ``YYYY-MM-DDTHH:MM:SSZ``.

    Raises:
        ValueError: If ``value`` is naive.
    """
    if value.tzinfo is None:
        raise ValueError("to_iso_utc() requires a timezone-aware datetime.")
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
