"""Datetime helpers.

Stored publication times are naive and expressed in UTC wall-clock.
"""

from datetime import datetime, timezone


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_publication_time(value) -> datetime:
    """Parse an ISO-8601 feed timestamp such as ``2024-05-01T18:30:00Z``.

    The offset is applied and then dropped, so ``10:00+02:00`` becomes
    ``08:00``. Raises ``ValueError`` for missing or malformed values.
    """
    if not value or not isinstance(value, str):
        raise ValueError(f"Missing publication time: {value!r}")
    return to_naive_utc(datetime.fromisoformat(value.replace('Z', '+00:00')))
