"""Date and time helpers anchored to Korean Standard Time."""

from __future__ import annotations

import calendar
import datetime as dt
import re

KST = dt.timezone(dt.timedelta(hours=9), name="KST")

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def get_str_from_naivedate(naive_date: dt.date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return f"{naive_date.year:04d}-{naive_date.month:02d}-{naive_date.day:02d}"


def get_str_from_naive_datetime(naive_datetime: dt.datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SSZ``."""
    return (
        f"{get_str_from_naivedate(naive_datetime.date())}"
        f"T{naive_datetime.hour:02d}:{naive_datetime.minute:02d}:{naive_datetime.second:02d}Z"
    )


def get_str_curdatetime() -> str:
    """Return the current Korean time formatted as ``YYYY-MM-DDTHH:MM:SSZ``."""
    return get_str_from_naive_datetime(get_current_kor_naive_datetime())


def get_naive_datetime_from_str(date: str, fmt: str) -> dt.datetime:
    """Parse a datetime string with the given strptime format."""
    try:
        return dt.datetime.strptime(date, fmt)
    except ValueError as exc:
        raise ValueError(f"Failed to parse datetime string {date!r}: {exc}") from exc


def get_naive_date_from_str(date: str, fmt: str) -> dt.date:
    """Parse a date string with the given strptime format."""
    try:
        return dt.datetime.strptime(date, fmt).date()
    except ValueError as exc:
        raise ValueError(f"Failed to parse date string {date!r}: {exc}") from exc


def get_current_kor_naive_datetime() -> dt.datetime:
    """Return the current Korean wall-clock time without timezone information."""
    return dt.datetime.now(dt.timezone.utc).astimezone(KST).replace(tzinfo=None)


def get_current_kor_naivedate() -> dt.date:
    """Return today's date in Korea."""
    return get_current_kor_naive_datetime().date()


def get_current_kor_naivedate_first_date() -> dt.date:
    """Return the first day of the current Korean month."""
    today = get_current_kor_naivedate()
    return get_naivedate(today.year, today.month, 1)


def get_lastday_naivedate(naive_date: dt.date) -> dt.date:
    """Return the last day of the month containing ``naive_date``."""
    _, last_day = calendar.monthrange(naive_date.year, naive_date.month)
    return naive_date.replace(day=last_day)


def get_naivedate(year: int, month: int, day: int) -> dt.date:
    """Build a date, raising ``ValueError`` if it does not exist."""
    try:
        return dt.date(year, month, day)
    except (ValueError, OverflowError) as exc:
        raise ValueError(
            f"Invalid date => year: {year}, month: {month}, day: {day}"
        ) from exc


def get_naivetime(hour: int, minute: int, second: int) -> dt.time:
    """Build a time of day, raising ``ValueError`` if it is out of range."""
    try:
        return dt.time(hour, minute, second)
    except (ValueError, OverflowError) as exc:
        raise ValueError(
            f"Invalid time => hour: {hour}, min: {minute}, sec: {second}"
        ) from exc


def get_naivedatetime(
    year: int, month: int, day: int, hour: int, minute: int, second: int
) -> dt.datetime:
    """Build a datetime from its components."""
    return dt.datetime.combine(
        get_naivedate(year, month, day), get_naivetime(hour, minute, second)
    )


def get_this_year_naivedatetime(
    month: int, day: int, hour: int, minute: int
) -> dt.datetime:
    """Build a datetime in the current Korean year, with zero seconds."""
    year = get_current_kor_naive_datetime().year
    return get_naivedatetime(year, month, day, hour, minute, 0)


def get_add_month_from_naivedate(naive_date: dt.date, add_month: int) -> dt.date:
    """Shift a date by whole months, clamping the day to the target month's end."""
    year_shift, month_index = divmod(naive_date.month - 1 + add_month, 12)
    new_year = naive_date.year + year_shift
    new_month = month_index + 1

    first_of_month = get_naivedate(new_year, new_month, 1)
    last_day = get_lastday_naivedate(first_of_month).day
    return first_of_month.replace(day=min(naive_date.day, last_day))


def get_add_date_from_naivedate(naive_date: dt.date, add_day: int) -> dt.date:
    """Shift a date by a number of days."""
    try:
        return naive_date + dt.timedelta(days=add_day)
    except OverflowError as exc:
        raise ValueError(
            f"Invalid date calculation: {naive_date} + {add_day} days"
        ) from exc


def validate_date_format(date_str: str, pattern: str) -> bool:
    """Return whether ``pattern`` matches anywhere in ``date_str``.

    An invalid pattern raises ``re.error``.
    """
    return re.search(pattern, date_str) is not None