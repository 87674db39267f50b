"""Gregorian calendar helpers: leap years, month lengths and day of year."""

from __future__ import annotations

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return True if ``year`` is a leap year in the Gregorian calendar."""
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year``."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    length = _MONTH_LENGTHS[month - 1]
    if month == 2 and is_leap_year(year):
        length += 1
    return length


def days_in_year(year: int) -> int:
    """Return the number of days in ``year``."""
    return sum(days_in_month(year, month) for month in range(1, 13))


def valid_date(year: int, month: int, day: int) -> bool:
    """Return True if the year, month and day name an existing date."""
    if year == 0 or month == 0 or day == 0:
        return False
    if month > 12:
        return False
    return day <= days_in_month(year, month)


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the position of the given date within its year, starting at 1."""
    return sum(days_in_month(year, m) for m in range(1, month)) + day


def reverse_day_of_year(year: int, day_of_year: int) -> tuple[int, int]:
    """Return the (month, day) that ``day_of_year`` falls on in ``year``.

    Days past the end of November all land in December.
    """
    remaining = day_of_year
    for month in range(1, 12):
        length = days_in_month(year, month)
        if length >= remaining:
            return month, remaining
        remaining -= length
    return 12, remaining