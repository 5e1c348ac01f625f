"""Date window helpers — expands flexible return ranges into per-day queries."""

from datetime import date, timedelta


def enumerate_dates(start: date, end: date) -> list[date]:
    """Every calendar date from start to end inclusive, ascending.

    An inverted range (end < start) yields an empty list.
    """
    span = (end - start).days
    return [start + timedelta(days=d) for d in range(span + 1)]


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)
