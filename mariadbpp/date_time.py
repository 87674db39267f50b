"""Calendar date combined with a time of day, with millisecond precision."""

from __future__ import annotations

import dataclasses
import re
import time as _time
from datetime import datetime, timezone

from .calendar_rules import (
    day_of_year as _day_of_year,
    days_in_month,
    is_leap_year,
    reverse_day_of_year,
    valid_date,
)
from .exceptions import DateTimeError, TimeError
from .time_span import TimeSpan

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = _MS_PER_SECOND * 60
_MS_PER_HOUR = _MS_PER_MINUTE * 60
_MS_PER_DAY = _MS_PER_HOUR * 24
_MAX_YEAR = 0xFFFF

_DATE_PATTERN = re.compile(
    r"\s*(\d+)(?:\s*(\S)\s*(\d+)(?:\s*(\S)\s*(\d+)(.*))?)?", re.DOTALL
)
_TIME_PATTERN = re.compile(r"\s*(\d+):(\d+)(?::(\d+)(?:\.(\d+))?)?\s*")


def _days_before_year(year: int) -> int:
    previous = year - 1
    return previous * 365 + previous // 4 - previous // 100 + previous // 400


def _check_time(hour: int, minute: int, second: int, millisecond: int) -> None:
    if not (
        0 <= hour < 24 and 0 <= minute < 60 and 0 <= second <= 60 and 0 <= millisecond < 1000
    ):
        raise TimeError(hour, minute, second, millisecond)


def _parse_time(text: str) -> tuple[int, int, int, int]:
    match = _TIME_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError("invalid time format")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3)) if match.group(3) else 0
    fraction = match.group(4) or ""
    millisecond = int(fraction.ljust(3, "0")[:3]) if fraction else 0
    return hour, minute, second, millisecond


class DateTime:
    """A date and time of day.

    The date part is not checked on construction, so partial dates such as
    those parsed from ``"2020"`` can exist; ``is_valid`` reports on them.
    The time part is always checked.
    """

    __slots__ = ("_year", "_month", "_day", "_hour", "_minute", "_second", "_millisecond")

    def __init__(
        self,
        year: int = 1970,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> None:
        _check_time(hour, minute, second, millisecond)
        self._year = year
        self._month = month
        self._day = day
        self._hour = hour
        self._minute = minute
        self._second = second
        self._millisecond = millisecond

    # construction helpers

    @classmethod
    def parse(cls, text: str) -> DateTime:
        """Parse ``yyyy-mm-dd hh:mm:ss.nnn``; trailing parts may be left out."""
        match = _DATE_PATTERN.fullmatch(text)
        if match is None:
            raise ValueError("invalid date format")
        year = int(match.group(1))
        if year > _MAX_YEAR:
            raise ValueError("invalid date format")
        if match.group(3) is None:
            return cls(year, 0, 0)
        month = int(match.group(3))
        if month >= 13:
            raise ValueError("invalid date format")
        if match.group(5) is None:
            return cls(year, month, 0)
        day = int(match.group(5))
        if day >= 32:
            raise ValueError("invalid date format")
        rest = match.group(6)
        if not rest:
            return cls(year, month, day)
        return cls(year, month, day, *_parse_time(rest))

    @classmethod
    def from_struct_time(cls, value: _time.struct_time) -> DateTime:
        """Build from a ``time.struct_time``; milliseconds are zero."""
        return cls(
            value.tm_year,
            value.tm_mon,
            value.tm_mday,
            value.tm_hour,
            value.tm_min,
            min(value.tm_sec, 60),
        )

    @classmethod
    def from_timestamp(cls, timestamp: float) -> DateTime:
        """Build from a POSIX timestamp in the local time zone, to the second."""
        return cls.from_struct_time(_time.localtime(timestamp))

    @classmethod
    def _from_datetime(cls, value: datetime) -> DateTime:
        return cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond // 1000,
        )

    @classmethod
    def now(cls) -> DateTime:
        """Return the current local date and time."""
        return cls._from_datetime(datetime.now())

    @classmethod
    def now_utc(cls) -> DateTime:
        """Return the current date and time in UTC."""
        return cls._from_datetime(datetime.now(timezone.utc))

    # parts

    @property
    def year(self) -> int:
        return self._year

    @year.setter
    def year(self, value: int) -> None:
        if not 1 <= value <= _MAX_YEAR:
            raise DateTimeError(value, *self._fields()[1:])
        self._year = value
        if not valid_date(value, self._month, self._day):
            self._month = 1
            self._day = 1

    @property
    def month(self) -> int:
        return self._month

    @month.setter
    def month(self, value: int) -> None:
        if not 1 <= value <= 12:
            fields = self._fields()
            raise DateTimeError(fields[0], value, *fields[2:])
        self._month = value
        if self._day > days_in_month(self._year, value):
            self._day = 1

    @property
    def day(self) -> int:
        return self._day

    @day.setter
    def day(self, value: int) -> None:
        if not 1 <= value <= days_in_month(self._year, self._month):
            fields = self._fields()
            raise DateTimeError(fields[0], fields[1], value, *fields[3:])
        self._day = value

    @property
    def day_of_year(self) -> int:
        """Position of the date within its year, starting at 1."""
        return _day_of_year(self._year, self._month, self._day)

    @day_of_year.setter
    def day_of_year(self, value: int) -> None:
        month, day = reverse_day_of_year(self._year, value)
        self.month = month
        self.day = day

    @property
    def hour(self) -> int:
        return self._hour

    @hour.setter
    def hour(self, value: int) -> None:
        _check_time(value, self._minute, self._second, self._millisecond)
        self._hour = value

    @property
    def minute(self) -> int:
        return self._minute

    @minute.setter
    def minute(self, value: int) -> None:
        _check_time(self._hour, value, self._second, self._millisecond)
        self._minute = value

    @property
    def second(self) -> int:
        return self._second

    @second.setter
    def second(self, value: int) -> None:
        _check_time(self._hour, self._minute, value, self._millisecond)
        self._second = value

    @property
    def millisecond(self) -> int:
        return self._millisecond

    @millisecond.setter
    def millisecond(self, value: int) -> None:
        _check_time(self._hour, self._minute, self._second, value)
        self._millisecond = value

    # comparison

    def _fields(self) -> tuple[int, int, int, int, int, int, int]:
        return (
            self._year,
            self._month,
            self._day,
            self._hour,
            self._minute,
            self._second,
            self._millisecond,
        )

    def _copy(self) -> DateTime:
        return DateTime(*self._fields())

    def compare(self, other: DateTime) -> int:
        """Return 1 if this is later, 0 if equal, -1 if earlier than ``other``."""
        mine, theirs = self._fields(), other._fields()
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        return hash(self._fields())

    # arithmetic

    def add_years(self, years: int) -> DateTime:
        """Return a copy moved by ``years``; an invalid date resets to 1 January."""
        result = self._copy()
        if years:
            result.year = self._year + years
        return result

    def add_months(self, months: int) -> DateTime:
        """Return a copy moved by ``months``; a day past the month's end resets to 1."""
        result = self._copy()
        if not months:
            return result
        years, month_index = divmod(self._month - 1 + months, 12)
        if years:
            result = result.add_years(years)
        result.month = month_index + 1
        return result

    def add_days(self, days: int) -> DateTime:
        """Return a copy moved by ``days``, wrapping across months and years."""
        result = self._copy()
        if not days:
            return result
        year = self._year
        position = self.day_of_year + days
        while position > (length := 366 if is_leap_year(year) else 365):
            position -= length
            year += 1
        while position < 1:
            year -= 1
            position += 366 if is_leap_year(year) else 365
        result.year = year
        result.day_of_year = position
        return result

    def _time_ms(self) -> int:
        return (
            self._hour * _MS_PER_HOUR
            + self._minute * _MS_PER_MINUTE
            + self._second * _MS_PER_SECOND
            + self._millisecond
        )

    def _shift_ms(self, milliseconds: int) -> DateTime:
        if not milliseconds:
            return self._copy()
        days, rest = divmod(self._time_ms() + milliseconds, _MS_PER_DAY)
        result = self.add_days(days)
        hour, rest = divmod(rest, _MS_PER_HOUR)
        minute, rest = divmod(rest, _MS_PER_MINUTE)
        second, millisecond = divmod(rest, _MS_PER_SECOND)
        result._hour, result._minute = hour, minute
        result._second, result._millisecond = second, millisecond
        return result

    def add_hours(self, hours: int) -> DateTime:
        """Return a copy moved by ``hours``, wrapping across days."""
        return self._shift_ms(hours * _MS_PER_HOUR)

    def add_minutes(self, minutes: int) -> DateTime:
        """Return a copy moved by ``minutes``, wrapping across hours."""
        return self._shift_ms(minutes * _MS_PER_MINUTE)

    def add_seconds(self, seconds: int) -> DateTime:
        """Return a copy moved by ``seconds``, wrapping across minutes."""
        return self._shift_ms(seconds * _MS_PER_SECOND)

    def add_milliseconds(self, milliseconds: int) -> DateTime:
        """Return a copy moved by ``milliseconds``, wrapping across seconds."""
        return self._shift_ms(milliseconds)

    def add(self, span: TimeSpan) -> DateTime:
        """Return a copy moved forward by ``span`` (backward if it is negative)."""
        total = span.total_milliseconds()
        return self._shift_ms(-total if span.negative else total)

    def subtract(self, span: TimeSpan) -> DateTime:
        """Return a copy moved backward by ``span``."""
        return self.add(dataclasses.replace(span, negative=not span.negative))

    def _absolute_ms(self) -> int:
        day_number = _days_before_year(self._year) + self.day_of_year
        return day_number * _MS_PER_DAY + self._time_ms()

    def time_between(self, other: DateTime) -> TimeSpan:
        """Return the span from ``other`` to this; negative if ``other`` is later."""
        if other == self:
            return TimeSpan()
        if other > self:
            return dataclasses.replace(other.time_between(self), negative=True)
        total = self._absolute_ms() - other._absolute_ms()
        days, total = divmod(total, _MS_PER_DAY)
        hours, total = divmod(total, _MS_PER_HOUR)
        minutes, total = divmod(total, _MS_PER_MINUTE)
        seconds, milliseconds = divmod(total, _MS_PER_SECOND)
        return TimeSpan(days, hours, minutes, seconds, milliseconds, False)

    # validity and conversion

    def is_valid(self) -> bool:
        """Return True if both the date and the time parts are valid."""
        if not valid_date(self._year, self._month, self._day):
            return False
        try:
            _check_time(self._hour, self._minute, self._second, self._millisecond)
        except TimeError:
            return False
        return True

    def mktime(self) -> int:
        """Return the local-time POSIX timestamp, to the second."""
        return int(
            _time.mktime(
                (
                    self._year,
                    self._month,
                    self._day,
                    self._hour,
                    self._minute,
                    self._second,
                    0,
                    0,
                    -1,
                )
            )
        )

    def diff_time(self, other: DateTime) -> float:
        """Return the number of seconds from ``other`` to this, in local time."""
        return float(self.mktime() - other.mktime())

    def date(self) -> DateTime:
        """Return the date part with the time set to midnight."""
        return DateTime(self._year, self._month, self._day)

    def str_date(self) -> str:
        """Return the date as ``yyyy-mm-dd``."""
        return f"{self._year:04d}-{self._month:02d}-{self._day:02d}"

    def to_string(self, with_millisecond: bool = False) -> str:
        """Return ``yyyy-mm-dd hh:mm:ss``, with ``.nnn`` if asked for."""
        text = (
            f"{self.str_date()} {self._hour:02d}:{self._minute:02d}:{self._second:02d}"
        )
        if with_millisecond:
            text += f".{self._millisecond:03d}"
        return text

    def __str__(self) -> str:
        return self.to_string(True)

    def __repr__(self) -> str:
        return "DateTime({}, {}, {}, {}, {}, {}, {})".format(*self._fields())