"""
Weekly calendar helpers.

Every series in this project is sampled at a fixed 7-day cadence, so dates
are derived from a start date and an index rather than stored independently
wherever possible.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

WEEK = timedelta(days=7)


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(tz=timezone.utc)


def weekly_dates(start: date, count: int) -> list[date]:
    """Return ``count`` dates starting at ``start`` and stepping one week.

    Args:
        start: First date of the sequence.
        count: Number of dates; values below 1 yield an empty list.

    Returns:
        List of dates ``[start, start + 7d, ...]``.
    """
    return [start + i * WEEK for i in range(max(0, count))]


def future_weekly_dates(last_observed: date, horizon: int) -> list[date]:
    """Return the ``horizon`` weekly dates strictly after ``last_observed``.

    Step ``h`` (1-indexed) lands on ``last_observed + 7h`` days, matching the
    forecast step ``h`` produced by the smoothing engines.
    """
    return [last_observed + h * WEEK for h in range(1, max(0, horizon) + 1)]


def is_weekly_cadence(dates: list[date]) -> bool:
    """True if consecutive dates are exactly one week apart."""
    return all((b - a) == WEEK for a, b in zip(dates, dates[1:]))
