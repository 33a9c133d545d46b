"""Date manipulation utilities"""

import calendar
import math
from datetime import date, datetime, timedelta

DATE_FMT = "%Y-%m-%d"


def to_date(value: date | datetime | str) -> date:
    """Normalize a date, datetime or 'YYYY-MM-DD' string to a calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value[:10], DATE_FMT).date()
    raise TypeError(f"Unsupported date-like value: {value!r}")


def add_months(from_date: date, months: int) -> date:
    """
    Step the month field by `months`, keeping the day of month.

    If the target month is shorter, clamp to its last day:
    Jan 31 + 1 month -> Feb 28 (Feb 29 in a leap year), never March.
    """
    index = from_date.month - 1 + months
    year = from_date.year + index // 12
    month = index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_days(from_date: date, days: int) -> date:
    """Add whole calendar days"""
    return from_date + timedelta(days=days)


def add_term_months(from_date: date, term_months: float) -> date:
    """
    Add a possibly fractional term expressed in months.

    The whole part steps months like add_months. The fractional remainder is
    converted to days on a 30-day month basis (0.5 month -> 15 days).
    NaN/inf terms count as 0 and negative terms clamp to 0.
    """
    safe_months = max(term_months, 0) if math.isfinite(term_months) else 0
    whole_months = int(safe_months)
    fractional = safe_months - whole_months

    result = add_months(from_date, whole_months)
    if fractional <= 0:
        return result
    # Round half up (built-in round() is half-to-even)
    return add_days(result, math.floor(fractional * 30 + 0.5))


def difference_in_calendar_days(later: date | datetime, earlier: date | datetime) -> int:
    """Whole calendar days from `earlier` to `later`, ignoring time of day"""
    return (to_date(later) - to_date(earlier)).days


def month_key(value: date) -> str:
    """Bucket key 'YYYY-MM' (zero-padded, so lexical order is chronological)"""
    return f"{value.year:04d}-{value.month:02d}"


def format_month_label(value: date) -> str:
    """Display label like 'Feb 2026'"""
    return f"{calendar.month_abbr[value.month]} {value.year}"
