"""A connection to a MariaDB or MySQL server described by an account."""

from __future__ import annotations

from types import TracebackType
from typing import Any, NoReturn

import pymysql
from pymysql.constants import CLIENT

from .account import Account
from .exceptions import DatabaseConnectionError, LastError


def _error_details(exc: BaseException) -> tuple[int, str]:
    args = exc.args
    if len(args) >= 2 and isinstance(args[0], int):
        return args[0], str(args[1])
    return 0, str(exc)


class Connection(LastError):
    """Wraps a database connection opened from an :class:`Account`.

    The connection is opened lazily: every operation that needs the server
    connects first if necessary.
    """

    def __init__(self, account: Account) -> None:
        super().__init__()
        self._account = account
        self._link: Any = None
        self._auto_commit = True
        self._schema = ""
        self._charset = ""

    @property
    def account(self) -> Account:
        """The account this connection was created with."""
        return self._account

    @property
    def schema(self) -> str:
        """Name of the schema selected through this connection."""
        return self._schema

    @property
    def charset(self) -> str:
        """Character set selected through this connection."""
        return self._charset

    @property
    def auto_commit(self) -> bool:
        """Current state of the auto-commit setting."""
        return self._auto_commit

    def _fail(self, exc: BaseException | None = None, *, close: bool = False) -> NoReturn:
        if exc is not None:
            self.record(*_error_details(exc))
        error_no, message = self.error_no, self.error
        if close:
            self.disconnect()
        raise DatabaseConnectionError(error_no, message) from exc

    def _connect_arguments(self) -> dict[str, Any]:
        account = self._account
        arguments: dict[str, Any] = {
            "host": account.host_name,
            "user": account.user_name,
            "password": account.password,
            "port": account.port,
            "unix_socket": account.unix_socket or None,
            "client_flag": CLIENT.MULTI_STATEMENTS,
            "autocommit": None,
        }
        if account.ssl_key:
            ssl = {
                "key": account.ssl_key,
                "cert": account.ssl_certificate,
                "ca": account.ssl_ca,
                "capath": account.ssl_ca_path,
                "cipher": account.ssl_cipher,
            }
            arguments["ssl"] = {name: value for name, value in ssl.items() if value}
        arguments.update(account.connect_options)
        return arguments

    def connected(self) -> bool:
        """Return True if the connection is open and the server answers."""
        if self._link is None:
            return False
        try:
            self._link.ping(reconnect=False)
        except pymysql.MySQLError:
            return False
        return True

    def connect(self) -> bool:
        """Open the connection and apply the account's settings.

        Does nothing if the connection is already active.
        """
        if self.connected():
            return True

        try:
            self._link = pymysql.connect(**self._connect_arguments())
        except TypeError as exc:
            self.record(0, str(exc))
            self._fail(exc, close=True)
        except pymysql.MySQLError as exc:
            self._fail(exc)

        # A fresh session runs with the server default, which is auto-commit on.
        self._auto_commit = True
        self.set_auto_commit(self._account.auto_commit)

        if self._account.schema:
            self.set_schema(self._account.schema)

        for name, value in self._account.options.items():
            if self.execute(f"SET OPTION {name}={value}") != 1:
                self._fail(close=True)

        return True

    def disconnect(self) -> None:
        """Close the connection if it is open."""
        if self._link is None:
            return
        link, self._link = self._link, None
        try:
            link.close()
        except pymysql.MySQLError:
            pass

    def set_schema(self, schema: str) -> bool:
        """Select ``schema`` as the current database."""
        self.connect()
        try:
            self._link.select_db(schema)
        except pymysql.MySQLError as exc:
            self._fail(exc)
        self._schema = schema
        return True

    def set_charset(self, value: str) -> bool:
        """Select the character set used by the connection."""
        self.connect()
        try:
            self._link.set_character_set(value)
        except pymysql.MySQLError as exc:
            self._fail(exc)
        self._charset = value
        return True

    def set_auto_commit(self, auto_commit: bool) -> bool:
        """Turn auto-commit on or off."""
        if self._auto_commit == auto_commit:
            return True
        self.connect()
        try:
            self._link.autocommit(auto_commit)
        except pymysql.MySQLError as exc:
            self._fail(exc)
        self._auto_commit = auto_commit
        return True

    def execute(self, query: str) -> int:
        """Run one or more statements and return the total rows affected."""
        self.connect()
        affected_rows = 0
        try:
            with self._link.cursor() as cursor:
                cursor.execute(query)
                while True:
                    if cursor.description is None:
                        affected_rows += max(cursor.rowcount, 0)
                    if not cursor.nextset():
                        break
        except pymysql.MySQLError as exc:
            self._fail(exc)
        return affected_rows

    def insert(self, query: str) -> int:
        """Run a statement and return the id of the last inserted row."""
        self.connect()
        try:
            with self._link.cursor() as cursor:
                cursor.execute(query)
            return self._link.insert_id()
        except pymysql.MySQLError as exc:
            self._fail(exc)

    def __enter__(self) -> Connection:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.disconnect()

    def __del__(self) -> None:
        try:
            self.disconnect()
        except Exception:
            pass