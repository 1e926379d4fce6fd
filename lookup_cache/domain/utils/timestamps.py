"""
Timestamp normalization and calendar arithmetic utilities.

Provides helpers to coerce datetimes to UTC and to shift a datetime by whole
calendar months, which is how document freshness is measured.
"""

import calendar
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


def ensure_utc(dt: datetime) -> datetime:
    """
    Return ``dt`` as a timezone-aware UTC datetime.

    Naive datetimes are assumed to already be in UTC.

    Examples
    --------
    >>> ensure_utc(datetime(2025, 10, 15, 12, 0))
    datetime.datetime(2025, 10, 15, 12, 0, tzinfo=datetime.timezone.utc)
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def add_months(dt: datetime, months: int) -> datetime:
    """
    Shift a datetime by a number of calendar months.

    The day of month is clamped to the last day of the target month, so
    January 31st plus one month is the last day of February. Time of day and
    tzinfo are preserved.

    Parameters
    ----------
    dt : datetime
        The datetime to shift
    months : int
        Number of months to add; may be negative

    Returns
    -------
    datetime
        The shifted datetime

    Examples
    --------
    >>> add_months(datetime(2025, 1, 31), 1)
    datetime.datetime(2025, 2, 28, 0, 0)
    >>> add_months(datetime(2025, 3, 15), -3)
    datetime.datetime(2024, 12, 15, 0, 0)
    """
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    try:
        day = min(dt.day, calendar.monthrange(year, month)[1])
        return dt.replace(year=year, month=month, day=day)
    except ValueError:
        logger.warning(
            "timestamps.add_months_failed",
            extra={"dt": str(dt), "months": months},
        )
        raise
