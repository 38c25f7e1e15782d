"""Tests for the MCP server session context."""

import pytest

from usql_mcp.database.dialects import Dialect
from usql_mcp.errors import ConnectionError, ConnectionStringParseError
from usql_mcp.mcp.context import ServerContext, get_context, reset_context
from tests.fixtures import FakeConnection


class TestServerContext:
    """Test ServerContext state."""

    def test_initial_state(self, empty_context):
        """Test a new context holds nothing."""
        assert empty_context.is_connected is False
        assert empty_context.dsn is None
        assert empty_context.dialect is None
        assert empty_context.table_resources == []

    def test_connect_adopts_connection(self):
        """Test an existing connection is adopted without opening one."""
        ctx = ServerContext()
        conn = FakeConnection()
        assert ctx.connect("pgx://localhost/app", connection=conn) is conn

        assert ctx.is_connected is True
        assert ctx.driver == "pgx"
        assert ctx.dialect == Dialect.POSTGRES

    def test_connect_opens_sqlite(self, sqlite_path):
        """Test connecting from a DSN alone."""
        ctx = ServerContext()
        ctx.connect(f"sqlite3://{sqlite_path}")
        try:
            assert ctx.dialect == Dialect.SQLITE
            assert ctx.connection.execute("SELECT 1").fetchone() == (1,)
        finally:
            ctx.close()

    def test_reconnect_closes_previous(self):
        """Test a new connection replaces and closes the old one."""
        ctx = ServerContext()
        first = FakeConnection()
        second = FakeConnection()
        ctx.connect("mysql://localhost/a", connection=first)
        ctx.connect("mysql://localhost/b", connection=second)

        assert first.closed is True
        assert ctx.connection is second
        assert ctx.dsn == "mysql://localhost/b"

    def test_invalid_dsn_keeps_state(self):
        """Test a bad DSN leaves the existing connection in place."""
        ctx = ServerContext()
        conn = FakeConnection()
        ctx.connect("mysql://localhost/a", connection=conn)

        with pytest.raises(ConnectionStringParseError):
            ctx.connect("no scheme here")
        assert ctx.connection is conn
        assert conn.closed is False

    def test_unknown_driver_has_no_dialect(self):
        """Test drivers outside the introspectable set have no dialect."""
        ctx = ServerContext()
        ctx.connect("trino://localhost/hive", connection=FakeConnection())
        assert ctx.dialect is None

    def test_require_connection(self, empty_context):
        """Test requiring a connection that is not open."""
        with pytest.raises(ConnectionError) as exc_info:
            empty_context.require_connection()
        assert exc_info.value.code == "CONNECTION_ERROR"

    def test_require_dsn(self, empty_context):
        """Test requiring a DSN that is not set."""
        with pytest.raises(ConnectionError):
            empty_context.require_dsn()

    def test_reset(self):
        """Test reset clears all state and closes the connection."""
        ctx = ServerContext()
        conn = FakeConnection()
        ctx.connect("sqlite3://app.db", connection=conn)
        ctx.table_resources.append("users")

        ctx.reset()

        assert conn.closed is True
        assert ctx.is_connected is False
        assert ctx.dsn is None
        assert ctx.driver is None
        assert ctx.table_resources == []


class TestGlobalContext:
    """Test the global context accessors."""

    def test_get_context_is_singleton(self):
        """Test the same context is returned until reset."""
        assert get_context() is get_context()

    def test_reset_context_closes(self):
        """Test reset_context closes the old connection."""
        conn = FakeConnection()
        get_context().connect("sqlite3://app.db", connection=conn)
        old = get_context()

        reset_context()

        assert conn.closed is True
        assert get_context() is not old
