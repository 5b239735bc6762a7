"""
Calendar helpers: day sequences and month bounds
"""
import calendar
from datetime import date, timedelta


def days_between(start: date, end: date) -> list[date]:
    """Every calendar day from start to end, inclusive and ascending.

    Returns an empty list when start is after end.
    """
    if start > end:
        return []
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing day"""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def previous_month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month before the one containing day"""
    first, _ = month_bounds(day)
    return month_bounds(first - timedelta(days=1))


def add_months(day: date, months: int) -> date:
    """Shift day by a number of months, clamping to the target month's length"""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def is_after_month(day: date, reference: date) -> bool:
    """True when day falls in a calendar month later than reference's"""
    return (day.year, day.month) > (reference.year, reference.month)


def same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)
