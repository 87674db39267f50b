"""Accounts, connections, date/time values, time spans and calendar helpers for MariaDB and MySQL."""

__version__ = "0.1.0"