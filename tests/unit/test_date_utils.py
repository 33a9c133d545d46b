"""Unit tests for calendar arithmetic"""

import math
import pytest
from datetime import date, datetime
from ladder_engine.utils.date_utils import (
    add_days,
    add_months,
    add_term_months,
    difference_in_calendar_days,
    format_month_label,
    month_key,
    to_date,
)


def test_add_months_whole_months():
    """Test stepping whole months keeps the day of month"""
    assert add_months(date(2025, 1, 15), 3) == date(2025, 4, 15)
    assert add_months(date(2025, 6, 15), 0) == date(2025, 6, 15)


def test_add_months_clamps_to_end_of_month():
    """Test Jan 31 + 1 month lands on the last day of February, never March"""
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)  # Leap year
    assert add_months(date(2025, 3, 31), 1) == date(2025, 4, 30)


def test_add_months_year_rollover():
    """Test crossing a year boundary in both directions"""
    assert add_months(date(2025, 11, 1), 3) == date(2026, 2, 1)
    assert add_months(date(2026, 1, 31), -2) == date(2025, 11, 30)


def test_add_term_months_whole():
    """Test whole-month terms behave like add_months"""
    assert add_term_months(date(2025, 8, 2), 6) == date(2026, 2, 2)


@pytest.mark.parametrize("start", [date(2026, 2, 1), date(2025, 7, 1), date(2024, 2, 20)])
def test_add_term_months_half_month_is_fifteen_days(start):
    """Test 0.5 month is always 15 days (30-day month basis), whatever the month length"""
    result = add_term_months(start, 0.5)
    assert difference_in_calendar_days(result, start) == 15


def test_add_term_months_mixed_term():
    """Test fractional days are added on top of the whole months"""
    # 1 month -> Feb 28, then 0.25 * 30 = 7.5 -> 8 days
    assert add_term_months(date(2025, 1, 31), 1.25) == date(2025, 3, 8)


@pytest.mark.parametrize("term", [math.nan, math.inf, -math.inf, -3])
def test_add_term_months_unsafe_terms_default_to_zero(term):
    """Test non-finite and negative terms leave the date unchanged"""
    assert add_term_months(date(2025, 6, 1), term) == date(2025, 6, 1)


def test_add_days():
    """Test adding calendar days across a month boundary"""
    assert add_days(date(2026, 1, 30), 3) == date(2026, 2, 2)


def test_difference_in_calendar_days():
    """Test whole-day differences"""
    assert difference_in_calendar_days(date(2025, 1, 31), date(2025, 1, 1)) == 30
    assert difference_in_calendar_days(date(2026, 2, 2), date(2025, 8, 2)) == 184
    assert difference_in_calendar_days(date(2024, 3, 1), date(2024, 2, 1)) == 29
    assert difference_in_calendar_days(date(2025, 6, 15), date(2025, 6, 15)) == 0


def test_difference_in_calendar_days_ignores_time_of_day():
    """Test late-evening vs early-morning timestamps still count one day"""
    later = datetime(2025, 1, 2, 0, 1)
    earlier = datetime(2025, 1, 1, 23, 59)
    assert difference_in_calendar_days(later, earlier) == 1
    assert difference_in_calendar_days(datetime(2025, 1, 1, 23, 59), datetime(2025, 1, 1, 0, 0)) == 0


def test_difference_in_calendar_days_antisymmetric():
    """Test diff(a, b) == -diff(b, a)"""
    a = date(2026, 3, 15)
    b = datetime(2025, 12, 1, 18, 30)
    assert difference_in_calendar_days(a, b) == -difference_in_calendar_days(b, a)


def test_month_key_zero_padded():
    """Test keys are YYYY-MM with zero-padded months"""
    assert month_key(date(2025, 1, 1)) == "2025-01"
    assert month_key(date(2025, 9, 30)) == "2025-09"
    assert month_key(date(2025, 11, 1)) == "2025-11"


def test_month_key_lexical_order_is_chronological():
    """Test sorting keys as strings matches sorting the dates"""
    dates = [date(2026, 1, 5), date(2025, 12, 1), date(2025, 9, 9), date(2027, 2, 1)]
    assert sorted(month_key(d) for d in dates) == [month_key(d) for d in sorted(dates)]


def test_format_month_label():
    """Test short month + year label"""
    assert format_month_label(date(2026, 2, 1)) == "Feb 2026"


def test_to_date_accepts_strings_and_datetimes():
    """Test normalization of date-like inputs"""
    assert to_date("2025-08-02") == date(2025, 8, 2)
    assert to_date(datetime(2025, 8, 2, 15, 30)) == date(2025, 8, 2)
    assert to_date(date(2025, 8, 2)) == date(2025, 8, 2)
    with pytest.raises(TypeError):
        to_date(20250802)
