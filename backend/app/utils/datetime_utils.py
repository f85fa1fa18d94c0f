"""
Timezone-aware datetime utilities.

This module provides utilities for working with timezone-aware datetimes,
ensuring consistent handling across the application.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union

# UTC timezone constant
UTC = timezone.utc

DateLike = Union[datetime, date]


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[DateLike]) -> Optional[datetime]:
    """
    Ensure a value is a timezone-aware datetime in UTC.

    Args:
        dt: datetime or date to convert (can be None, naive, or timezone-aware).
            A plain date is taken as midnight UTC.

    Returns:
        Optional[datetime]: UTC timezone-aware datetime, or None if input is None
    """
    if dt is None:
        return None

    if not isinstance(dt, datetime):
        return datetime.combine(dt, time.min, tzinfo=UTC)

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=UTC)

    # Already timezone-aware - convert to UTC
    return dt.astimezone(UTC)


def difference_in_days(later: DateLike, earlier: DateLike) -> int:
    """
    Number of whole days between two points in time.

    Partial days are truncated toward zero, so the result is negative
    when ``later`` precedes ``earlier``.

    Example:
        >>> difference_in_days(datetime(2026, 1, 6, 23), datetime(2026, 1, 1))
        5
    """
    delta = ensure_utc(later) - ensure_utc(earlier)
    return int(delta.total_seconds() / 86400)
