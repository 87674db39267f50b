"""A span of time with day, hour, minute, second and millisecond parts."""

from __future__ import annotations

from dataclasses import dataclass

_MS_PER_SECOND = 1000
_SECONDS_PER_MINUTE = 60
_MINUTES_PER_HOUR = 60
_HOURS_PER_DAY = 24


@dataclass(frozen=True, eq=False)
class TimeSpan:
    """A signed duration made of days, hours, minutes, seconds and milliseconds.

    The parts themselves are never negative; the sign is kept in ``negative``.
    """

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    negative: bool = False

    def __post_init__(self) -> None:
        for name in ("days", "hours", "minutes", "seconds", "milliseconds"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    def is_zero(self) -> bool:
        """Return True if every part of the span is zero."""
        return not (
            self.days or self.hours or self.minutes or self.seconds or self.milliseconds
        )

    def total_hours(self) -> int:
        """Return the span's magnitude in whole hours."""
        return self.days * _HOURS_PER_DAY + self.hours

    def total_minutes(self) -> int:
        """Return the span's magnitude in whole minutes."""
        return self.total_hours() * _MINUTES_PER_HOUR + self.minutes

    def total_seconds(self) -> int:
        """Return the span's magnitude in whole seconds."""
        return self.total_minutes() * _SECONDS_PER_MINUTE + self.seconds

    def total_milliseconds(self) -> int:
        """Return the span's magnitude in milliseconds."""
        return self.total_seconds() * _MS_PER_SECOND + self.milliseconds

    def _signed_milliseconds(self) -> int:
        total = self.total_milliseconds()
        return -total if self.negative else total

    def compare(self, other: TimeSpan) -> int:
        """Return 1 if this span is greater, 0 if equal, -1 if smaller."""
        mine = self._signed_milliseconds()
        theirs = other._signed_milliseconds()
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: TimeSpan) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: TimeSpan) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: TimeSpan) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: TimeSpan) -> bool:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        return hash(self._signed_milliseconds())

    def __str__(self) -> str:
        sign = "-" if self.negative and not self.is_zero() else ""
        return (
            f"{sign}{self.days} {self.hours:02d}:{self.minutes:02d}:"
            f"{self.seconds:02d}.{self.milliseconds:03d}"
        )