"""
Unit tests: year-month parsing, period validation, month expansion, paging helpers.
"""
import re
from datetime import datetime, timezone

import pytest

from market.core.errors import InvalidPeriodError
from market.core.paging import get_offset, get_total_page_num
from market.services.period import (
    YEAR_MONTH_PATTERN,
    YearMonth,
    YearMonthPeriod,
    check_period,
    is_right_period,
    months_between,
    one_month_before_midnight,
)

CURRENT = YearMonth(2022, 12)


def test_parse_and_str():
    ym = YearMonth.parse("2022-03")
    assert ym == YearMonth(2022, 3)
    assert str(ym) == "2022-03"


@pytest.mark.parametrize("value", ["2022-1", "2022-13", "22-01", "2022/01", "2022-00"])
def test_pattern_rejects_malformed_year_month(value):
    assert re.match(YEAR_MONTH_PATTERN, value) is None


def test_month_bounds():
    nov = YearMonth(2022, 11)
    assert nov.first_moment() == datetime(2022, 11, 1, tzinfo=timezone.utc)
    assert nov.last_moment() == datetime(2022, 11, 30, 23, 59, 59, 999999, tzinfo=timezone.utc)
    assert YearMonth(2024, 2).last_moment().day == 29


def test_right_period():
    assert is_right_period(YearMonth(2022, 1), YearMonth(2022, 12), CURRENT)
    assert is_right_period(YearMonth(2022, 5), YearMonth(2022, 5), CURRENT)


def test_start_after_end_is_rejected():
    assert not is_right_period(YearMonth(2022, 6), YearMonth(2022, 5), CURRENT)
    with pytest.raises(InvalidPeriodError):
        check_period(YearMonth(2022, 6), YearMonth(2022, 5), CURRENT)


def test_end_after_current_month_is_rejected():
    with pytest.raises(InvalidPeriodError):
        check_period(YearMonth(2022, 11), YearMonth(2023, 1), CURRENT)


@pytest.mark.parametrize("start", ["0001-01", "1000-01", "1969-12"])
def test_start_before_earliest_month_is_rejected(start):
    with pytest.raises(InvalidPeriodError):
        check_period(YearMonth.parse(start), YearMonth(2022, 1), CURRENT)


def test_earliest_month_is_accepted():
    period = check_period(YearMonth(1970, 1), YearMonth(1970, 2), CURRENT)
    assert period.start_datetime == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_pattern_rejects_year_zero():
    assert re.match(YEAR_MONTH_PATTERN, "0000-01") is None
    assert re.match(YEAR_MONTH_PATTERN, "2024-01") is not None


def test_check_period_returns_datetime_range():
    period = check_period(YearMonth(2022, 11), YearMonth(2022, 12), CURRENT)
    assert period.start_datetime == datetime(2022, 11, 1, tzinfo=timezone.utc)
    assert period.end_datetime.date().isoformat() == "2022-12-31"


def test_months_between_crosses_year():
    period = YearMonthPeriod(YearMonth(2022, 11), YearMonth(2023, 2))
    assert months_between(period) == ["2022-11", "2022-12", "2023-01", "2023-02"]


def test_one_month_before_midnight():
    moment = datetime(2023, 3, 31, 15, 30, tzinfo=timezone.utc)
    assert one_month_before_midnight(moment) == datetime(2023, 2, 28, tzinfo=timezone.utc)
    assert one_month_before_midnight(datetime(2023, 1, 10, 8, 0, tzinfo=timezone.utc)) == datetime(
        2022, 12, 10, tzinfo=timezone.utc
    )


def test_paging():
    assert get_offset(1, 10) == 0
    assert get_offset(3, 10) == 20
    assert get_total_page_num(0, 10) == 0
    assert get_total_page_num(10, 10) == 1
    assert get_total_page_num(11, 10) == 2
