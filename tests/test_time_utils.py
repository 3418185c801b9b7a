import datetime as dt
import re

import pytest

from consume_alert import time_utils as tu


def _kor_now():
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None) + dt.timedelta(hours=9)


def test_str_from_naivedate_pads_components():
    assert tu.get_str_from_naivedate(dt.date(2024, 3, 5)) == "2024-03-05"


@pytest.mark.parametrize(
    "d", [dt.date(2024, 1, 1), dt.date(1999, 12, 31), dt.date(2024, 2, 29)]
)
def test_date_string_round_trip(d):
    text = tu.get_str_from_naivedate(d)
    assert tu.get_naive_date_from_str(text, "%Y-%m-%d") == d


def test_str_from_naive_datetime_format():
    value = dt.datetime(2024, 11, 25, 10, 2, 0)
    assert tu.get_str_from_naive_datetime(value) == "2024-11-25T10:02:00Z"


def test_datetime_string_round_trip():
    value = dt.datetime(2023, 7, 9, 23, 59, 1)
    text = tu.get_str_from_naive_datetime(value)
    assert tu.get_naive_datetime_from_str(text, "%Y-%m-%dT%H:%M:%SZ") == value


def test_naive_datetime_from_str_invalid():
    with pytest.raises(ValueError):
        tu.get_naive_datetime_from_str("not a date", "%Y-%m-%d %H:%M")


def test_naive_date_from_str_invalid():
    with pytest.raises(ValueError):
        tu.get_naive_date_from_str("2024-13-01", "%Y-%m-%d")


def test_current_kor_naive_datetime_is_kst():
    before = _kor_now()
    result = tu.get_current_kor_naive_datetime()
    after = _kor_now()
    assert result.tzinfo is None
    assert before <= result <= after


def test_current_kor_naivedate():
    before = _kor_now().date()
    result = tu.get_current_kor_naivedate()
    after = _kor_now().date()
    assert before <= result <= after


def test_current_kor_first_date():
    before = _kor_now().date().replace(day=1)
    result = tu.get_current_kor_naivedate_first_date()
    after = _kor_now().date().replace(day=1)
    assert result.day == 1
    assert before <= result <= after


def test_str_curdatetime_parses_back():
    before = _kor_now().replace(microsecond=0)
    text = tu.get_str_curdatetime()
    after = _kor_now()
    parsed = tu.get_naive_datetime_from_str(text, "%Y-%m-%dT%H:%M:%SZ")
    assert before <= parsed <= after


@pytest.mark.parametrize(
    "d",
    [dt.date(2024, 2, 10), dt.date(2023, 2, 1), dt.date(2024, 12, 15), dt.date(2024, 4, 30)],
)
def test_lastday_is_end_of_month(d):
    last = tu.get_lastday_naivedate(d)
    assert (last.year, last.month) == (d.year, d.month)
    assert (last + dt.timedelta(days=1)).day == 1


def test_lastday_leap_february():
    assert tu.get_lastday_naivedate(dt.date(2024, 2, 1)) == dt.date(2024, 2, 29)


def test_get_naivedate_valid_and_invalid():
    assert tu.get_naivedate(2024, 11, 30) == dt.date(2024, 11, 30)
    with pytest.raises(ValueError):
        tu.get_naivedate(2024, 11, 31)
    with pytest.raises(ValueError):
        tu.get_naivedate(2024, 13, 1)


def test_get_naivetime_valid_and_invalid():
    assert tu.get_naivetime(10, 2, 59) == dt.time(10, 2, 59)
    with pytest.raises(ValueError):
        tu.get_naivetime(24, 0, 0)
    with pytest.raises(ValueError):
        tu.get_naivetime(1, 60, 0)


def test_get_naivedatetime():
    assert tu.get_naivedatetime(2024, 1, 2, 3, 4, 5) == dt.datetime(2024, 1, 2, 3, 4, 5)
    with pytest.raises(ValueError):
        tu.get_naivedatetime(2023, 2, 29, 0, 0, 0)


def test_this_year_naivedatetime():
    before = _kor_now().year
    result = tu.get_this_year_naivedatetime(3, 15, 10, 30)
    after = _kor_now().year
    assert before <= result.year <= after
    assert (result.month, result.day, result.hour, result.minute, result.second) == (
        3,
        15,
        10,
        30,
        0,
    )


def test_this_year_naivedatetime_invalid():
    with pytest.raises(ValueError):
        tu.get_this_year_naivedatetime(4, 31, 0, 0)


def test_add_month_clamps_day():
    result = tu.get_add_month_from_naivedate(dt.date(2024, 1, 31), 1)
    assert result == tu.get_lastday_naivedate(dt.date(2024, 2, 1))


@pytest.mark.parametrize("n", [-25, -13, -12, -1, 0, 1, 11, 12, 13, 30])
def test_add_month_round_trip_for_early_days(n):
    d = dt.date(2024, 5, 17)
    shifted = tu.get_add_month_from_naivedate(d, n)
    assert shifted.day == d.day
    assert tu.get_add_month_from_naivedate(shifted, -n) == d


@pytest.mark.parametrize("month", range(1, 13))
def test_add_twelve_months_is_next_year(month):
    d = dt.date(2022, month, 10)
    assert tu.get_add_month_from_naivedate(d, 12) == d.replace(year=2023)
    assert tu.get_add_month_from_naivedate(d, -12) == d.replace(year=2021)


def test_add_month_backwards_across_year():
    result = tu.get_add_month_from_naivedate(dt.date(2024, 1, 10), -1)
    assert (result.year, result.month, result.day) == (2023, 12, 10)


def test_add_month_out_of_range():
    with pytest.raises(ValueError):
        tu.get_add_month_from_naivedate(dt.date(9999, 12, 1), 1)


@pytest.mark.parametrize("n", [-400, -31, -1, 0, 1, 30, 366])
def test_add_date_round_trip(n):
    d = dt.date(2024, 2, 29)
    shifted = tu.get_add_date_from_naivedate(d, n)
    assert (shifted - d).days == n
    assert tu.get_add_date_from_naivedate(shifted, -n) == d


def test_add_date_overflow():
    with pytest.raises(ValueError):
        tu.get_add_date_from_naivedate(dt.date(9999, 12, 31), 1)


def test_validate_date_format():
    pattern = r"^\d{4}-\d{2}-\d{2}$"
    assert tu.validate_date_format("2024-11-25", pattern) is True
    assert tu.validate_date_format("2024/11/25", pattern) is False


def test_validate_date_format_matches_anywhere():
    assert tu.validate_date_format("from 2024-11-25 on", r"\d{4}-\d{2}-\d{2}") is True


def test_validate_date_format_bad_pattern():
    with pytest.raises(re.error):
        tu.validate_date_format("2024", "(")