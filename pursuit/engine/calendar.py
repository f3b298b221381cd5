"""Business-day calendar.

Monday through Friday are business days. No holiday calendar is applied.

Every function takes its dates as arguments and never reads the system
clock, so results depend only on the inputs.

Usage:
    from pursuit.engine.calendar import add_business_days, count_business_days

    due = add_business_days(last_touch, 10)
    overdue = count_business_days(due, today)
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional

# date.weekday(): Monday=0 ... Friday=4, Saturday=5, Sunday=6
_FIRST_WEEKEND_DAY = 5


def to_date(value: date) -> date:
    """Strip time-of-day so comparisons happen at day granularity."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: Any) -> Optional[date]:
    """Read a date from a date, datetime or ISO string.

    Args:
        value: Raw value from storage or a caller

    Returns:
        The date, or None when missing or malformed
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return to_date(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def is_business_day(day: date) -> bool:
    """True for Monday through Friday."""
    return to_date(day).weekday() < _FIRST_WEEKEND_DAY


def next_business_day(day: date) -> date:
    """Earliest business day strictly after the given date."""
    result = to_date(day) + timedelta(days=1)
    while not is_business_day(result):
        result += timedelta(days=1)
    return result


def add_business_days(start_date: date, business_days: int) -> date:
    """Add business days to a date (skip weekends).

    The start date itself is never counted, so Friday + 1 is Monday and
    Saturday + 1 is also Monday.

    Args:
        start_date: Starting date
        business_days: Number of business days to add. Zero or negative
            returns the start date unchanged.

    Returns:
        Resulting date
    """
    result = to_date(start_date)
    days_added = 0

    while days_added < business_days:
        result += timedelta(days=1)
        if is_business_day(result):
            days_added += 1

    return result


def count_business_days(start: date, end: date) -> int:
    """Count business days in the half-open range (start, end].

    Args:
        start: Exclusive lower bound
        end: Inclusive upper bound

    Returns:
        Number of business days, 0 when end <= start
    """
    start = to_date(start)
    end = to_date(end)
    if end <= start:
        return 0

    span = (end - start).days
    weeks, remainder = divmod(span, 7)
    count = weeks * 5

    day = start + timedelta(weeks=weeks)
    for _ in range(remainder):
        day += timedelta(days=1)
        if is_business_day(day):
            count += 1

    return count
