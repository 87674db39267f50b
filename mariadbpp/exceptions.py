"""Exception types and last-error bookkeeping."""

from __future__ import annotations


class MariaDBError(Exception):
    """Base class of every error raised by this package."""


class _ServerError(MariaDBError):
    """An error reported by the server or the client library, with its code."""

    def __init__(self, error_no: int, message: str) -> None:
        super().__init__(message)
        self.error_no = error_no
        self.message = message

    def __str__(self) -> str:
        return self.message


class DatabaseConnectionError(_ServerError):
    """Raised when a connection-level operation fails."""

    def __init__(self, error_no: int, message: str) -> None:
        super().__init__(error_no, message)


class StatementError(_ServerError):
    """Raised when a prepared statement operation fails."""

    def __init__(self, error_no: int, message: str) -> None:
        super().__init__(error_no, message)


class DateTimeError(MariaDBError, ValueError):
    """Raised when a date and time would become invalid."""

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        millisecond: int,
    ) -> None:
        self.year = year
        self.month = month
        self.day = day
        self.hour = hour
        self.minute = minute
        self.second = second
        self.millisecond = millisecond
        self.message = (
            f"Invalid date time: {year:04d}-{month:02d}-{day:02d}"
            f"T{hour:02d}:{minute:02d}:{second:02d}.{millisecond:03d}"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class TimeError(MariaDBError, ValueError):
    """Raised when a time of day would become invalid."""

    def __init__(self, hour: int, minute: int, second: int, millisecond: int) -> None:
        self.hour = hour
        self.minute = minute
        self.second = second
        self.millisecond = millisecond
        self.message = (
            f"Invalid time: {hour:02d}:{minute:02d}:{second:02d}.{millisecond:03d}"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class LastError:
    """Remembers the code and text of the most recent error."""

    def __init__(self) -> None:
        self.error_no: int = 0
        self.error: str = ""

    def record(self, error_no: int, message: str) -> None:
        """Store an error code and its message as the most recent error."""
        self.error_no = error_no
        self.error = message