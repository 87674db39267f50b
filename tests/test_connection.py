from unittest import mock

import pymysql
import pytest
from pymysql.constants import CLIENT

from mariadbpp.account import Account
from mariadbpp.connection import Connection
from mariadbpp.exceptions import DatabaseConnectionError

PASSWORD = "password"


class FakeCursor:
    def __init__(self, link):
        self.link = link
        self.description = None
        self.rowcount = -1
        self._results = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None

    def _load(self):
        self.description, self.rowcount = self._results.pop(0)

    def execute(self, query):
        self.link.queries.append(query)
        if self.link.query_error is not None:
            raise self.link.query_error
        self._results = list(self.link.results.get(query, [(None, 0)]))
        self._load()

    def nextset(self):
        if not self._results:
            return None
        self._load()
        return True


class FakeLink:
    def __init__(self):
        self.queries = []
        self.results = {}
        self.query_error = None
        self.ping_error = None
        self.selected = []
        self.charsets = []
        self.autocommit_calls = []
        self.closed = False
        self.last_id = 0

    def ping(self, reconnect=True):
        if self.ping_error is not None:
            raise self.ping_error

    def select_db(self, name):
        self.selected.append(name)

    def set_character_set(self, value):
        self.charsets.append(value)

    def autocommit(self, value):
        self.autocommit_calls.append(value)

    def cursor(self):
        return FakeCursor(self)

    def insert_id(self):
        return self.last_id

    def close(self):
        self.closed = True


def make_account(**changes):
    password = PASSWORD
    account = Account("db.example.com", "user", password, port=3307)
    for name, value in changes.items():
        setattr(account, name, value)
    return account


@pytest.fixture
def link():
    fake = FakeLink()
    with mock.patch("pymysql.connect", return_value=fake) as connect:
        fake.connect_mock = connect
        yield fake


def test_not_connected_before_connect():
    conn = Connection(make_account())
    assert conn.connected() is False
    assert conn.auto_commit is True


def test_connect_passes_account_settings(link):
    conn = Connection(make_account())
    assert conn.connect() is True
    kwargs = link.connect_mock.call_args.kwargs
    assert kwargs["host"] == "db.example.com"
    assert kwargs["user"] == "user"
    assert kwargs["password"] == PASSWORD
    assert kwargs["port"] == 3307
    assert kwargs["unix_socket"] is None
    assert kwargs["client_flag"] & CLIENT.MULTI_STATEMENTS
    assert "ssl" not in kwargs
    assert conn.connected() is True


def test_connect_includes_ssl_and_socket(link):
    account = make_account(unix_socket="/tmp/db.sock")
    account.set_ssl("client.key", "client.pem", "ca.pem", "", "")
    conn = Connection(account)
    assert conn.connect() is True
    assert conn.connected() is True
    kwargs = link.connect_mock.call_args.kwargs
    assert kwargs["unix_socket"] == "/tmp/db.sock"
    assert kwargs["ssl"] == {"key": "client.key", "cert": "client.pem", "ca": "ca.pem"}


def test_connect_options_are_forwarded(link):
    account = make_account()
    account.set_connect_option("connect_timeout", 5)
    conn = Connection(account)
    assert conn.connect() is True
    assert link.connect_mock.call_args.kwargs["connect_timeout"] == 5


def test_connect_only_once_while_alive(link):
    conn = Connection(make_account())
    assert conn.connect() is True
    assert conn.connect() is True
    assert conn.connected() is True
    assert link.connect_mock.call_count == 1


def test_connect_applies_schema_and_auto_commit(link):
    conn = Connection(make_account(schema="shop", auto_commit=False))
    conn.connect()
    assert link.selected == ["shop"]
    assert conn.schema == "shop"
    assert link.autocommit_calls == [False]
    assert conn.auto_commit is False


def test_connect_failure_raises_and_records(link):
    link.connect_mock.side_effect = pymysql.err.OperationalError(2003, "Can't connect")
    conn = Connection(make_account())
    with pytest.raises(DatabaseConnectionError) as info:
        conn.connect()
    assert info.value.error_no == 2003
    assert str(info.value) == "Can't connect"
    assert conn.error_no == 2003
    assert conn.error == "Can't connect"
    assert conn.connected() is False


def test_bad_connect_option_raises_connection_error(link):
    link.connect_mock.side_effect = TypeError("unexpected keyword")
    account = make_account()
    account.set_connect_option("bogus", True)
    with pytest.raises(DatabaseConnectionError) as info:
        Connection(account).connect()
    assert info.value.error_no == 0


def test_session_option_requires_one_affected_row(link):
    account = make_account()
    account.set_option("sql_mode", "ANSI")
    link.results["SET OPTION sql_mode=ANSI"] = [(None, 0)]
    conn = Connection(account)
    with pytest.raises(DatabaseConnectionError):
        conn.connect()
    assert link.closed is True
    assert conn.connected() is False


def test_session_option_is_sent(link):
    account = make_account()
    account.set_option("sql_mode", "ANSI")
    link.results["SET OPTION sql_mode=ANSI"] = [(None, 1)]
    conn = Connection(account)
    assert conn.connect() is True
    assert conn.connected() is True
    assert link.queries == ["SET OPTION sql_mode=ANSI"]


def test_execute_sums_affected_rows_over_statements(link):
    query = "UPDATE a SET x=1; SELECT 1; UPDATE b SET y=2"
    link.results[query] = [(None, 2), ((("1",),), 1), (None, 3)]
    conn = Connection(make_account())
    assert conn.execute(query) == 5


def test_execute_error_raises(link):
    conn = Connection(make_account())
    conn.connect()
    link.query_error = pymysql.err.ProgrammingError(1064, "syntax error")
    with pytest.raises(DatabaseConnectionError) as info:
        conn.execute("SELEC 1")
    assert info.value.error_no == 1064
    assert conn.error == "syntax error"


def test_insert_returns_last_id(link):
    link.last_id = 42
    conn = Connection(make_account())
    assert conn.insert("INSERT INTO t VALUES (1)") == 42
    assert link.queries == ["INSERT INTO t VALUES (1)"]


def test_set_charset_and_schema(link):
    conn = Connection(make_account())
    assert conn.set_charset("utf8mb4") is True
    assert conn.set_schema("inventory") is True
    assert conn.charset == "utf8mb4"
    assert conn.schema == "inventory"
    assert link.charsets == ["utf8mb4"]
    assert link.selected == ["inventory"]


def test_set_auto_commit_same_value_does_nothing(link):
    conn = Connection(make_account())
    assert conn.set_auto_commit(True) is True
    assert link.connect_mock.call_count == 0
    conn.set_auto_commit(False)
    assert link.autocommit_calls == [False]


def test_stale_connection_is_not_connected(link):
    conn = Connection(make_account())
    conn.connect()
    link.ping_error = pymysql.err.OperationalError(2006, "gone away")
    assert conn.connected() is False


def test_disconnect_closes(link):
    conn = Connection(make_account())
    conn.connect()
    conn.disconnect()
    assert link.closed is True
    assert conn.connected() is False


def test_context_manager_connects_and_closes(link):
    with Connection(make_account()) as conn:
        assert conn.connected() is True
    assert link.closed is True
    assert conn.connected() is False


def test_account_is_kept(link):
    account = make_account()
    assert Connection(account).account is account