# mariadbpp

A small library for MariaDB and MySQL servers. It is built on PyMySQL and contains these modules:

- `mariadbpp.account`: `Account` holds connection settings. These are the host, user, password, schema, port and unix socket, the auto-commit flag, the SSL files, named session options and client connect options.
- `mariadbpp.connection`: `Connection` opens a connection from an `Account`. It can run statements, perform inserts, and switch the schema, character set or auto-commit mode.
- `mariadbpp.date_time`: `DateTime` is a calendar date and time with millisecond precision. It supports arithmetic, comparison, parsing and formatting.
- `mariadbpp.time_span`: `TimeSpan` is a signed duration made of days, hours, minutes, seconds and milliseconds.
- `mariadbpp.calendar_rules`: Gregorian helpers `is_leap_year`, `valid_date`, `days_in_year`, `days_in_month`, `day_of_year` and `reverse_day_of_year`.
- `mariadbpp.exceptions`: `MariaDBError` is the base class. Below it are `DatabaseConnectionError`, `StatementError`, `DateTimeError` and `TimeError`. This module also has `LastError`, which keeps the code and text of the most recent error.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Accounts

```python
from mariadbpp.account import Account

password = "password"
account = Account("localhost", "user", password, schema="test", port=3306)
account.set_option("sql_mode", "'ANSI'")
account.set_connect_option("connect_timeout", 5)
```

How the connection uses these settings:

- **Session options** (`set_option`): after connecting, each one is applied as `SET OPTION name=value`.
- **Connect options** (`set_connect_option`): these are passed as keyword arguments when PyMySQL opens the connection. Each value must be a `bool`, `int` or `str`.
- **SSL** (`set_ssl`): the SSL settings are used when an SSL key is set.

## Connecting

```python
from mariadbpp.connection import Connection

with Connection(account) as conn:
    conn.execute("CREATE TABLE IF NOT EXISTS t (id INT AUTO_INCREMENT PRIMARY KEY, v INT)")
    new_id = conn.insert("INSERT INTO t (v) VALUES (42)")
    affected = conn.execute("UPDATE t SET v = 43")
```

The connection opens lazily: any operation that needs the server connects first. The connection is opened with multi-statement support.

- `execute` returns the total number of rows affected across all statements in the query.
- `insert` returns the id of the last inserted row.
- `connected()` pings the server to check that the connection is still alive.

When the server or the client library reports an error, `DatabaseConnectionError` is raised with the error number and message. The same code and text are kept on the connection as `error_no` and `error`.

## Dates and times

```python
from mariadbpp.date_time import DateTime
from mariadbpp.time_span import TimeSpan

dt = DateTime.parse("2020-02-28 23:59:59.500")
later = dt.add_days(2)
print(later.str_date())            # 2020-03-01
print(dt.to_string(True))          # 2020-02-28 23:59:59.500

span = later.time_between(dt)
print(span.total_hours())
print(dt.add(TimeSpan(days=1)))
```

**Parsing.** `DateTime.parse` accepts `yyyy-mm-dd hh:mm:ss.nnn`, and trailing parts may be left out. A malformed string raises `ValueError`.

**Validation.**
- The time part is checked on construction. An invalid time raises `TimeError`.
- The date part is not checked on construction. Use `is_valid()` to test it.
- Assigning an invalid year, month or day raises `DateTimeError`.

**Other constructors and conversions.**
- `DateTime.now()` and `DateTime.now_utc()` return the current local time and UTC time.
- `from_timestamp` and `from_struct_time` build a `DateTime` from a POSIX timestamp or a `time.struct_time`.
- `mktime` and `diff_time` convert to and compare local POSIX timestamps.

## What this package does not do

- There are no queries that return rows, so there are no result sets.
- There are no prepared statements. `StatementError` is defined but nothing in the package raises it.
- There are no transaction or save-point objects. Transactions are limited to turning auto-commit off and issuing the SQL yourself through `execute`.
- There is no background worker for running queries concurrently.
- There is no command-line program.