"""Tests for dialect dispatch."""

import pytest

from usql_mcp.database import introspect
from usql_mcp.database.base import DialectIntrospector
from usql_mcp.database.dialects import Dialect
from usql_mcp.database.postgres import PostgresIntrospector
from usql_mcp.errors import (
    CatalogQueryError,
    ConnectionStringParseError,
    UnsupportedDialect,
    ValidationError,
)
from tests.fixtures import FakeConnection


class TestIntrospectorRegistry:
    """Test the dialect-to-introspector table."""

    def test_every_dialect_registered(self):
        """Test each dialect has exactly one introspector of its own."""
        assert set(introspect.INTROSPECTORS) == set(Dialect)
        for dialect, introspector_cls in introspect.INTROSPECTORS.items():
            assert issubclass(introspector_cls, DialectIntrospector)
            assert introspector_cls.dialect == dialect

    def test_get_by_token(self):
        """Test raw driver tokens resolve."""
        assert isinstance(introspect.get_introspector("pgx"), PostgresIntrospector)

    def test_get_by_dialect(self):
        """Test Dialect members resolve."""
        assert isinstance(introspect.get_introspector(Dialect.POSTGRES), PostgresIntrospector)

    def test_unknown_token(self):
        """Test an unknown token is rejected with the operation named."""
        with pytest.raises(UnsupportedDialect) as exc_info:
            introspect.get_introspector("cassandra")

        assert exc_info.value.token == "cassandra"
        assert exc_info.value.code == "UNSUPPORTED_DIALECT"
        assert exc_info.value.message == "unsupported database driver for introspection: cassandra"


class TestDescribeTable:
    """Test describe dispatch."""

    def test_unsupported_dialect_touches_nothing(self):
        """Test no cursor is opened for an unsupported dialect."""
        conn = FakeConnection()
        with pytest.raises(UnsupportedDialect):
            introspect.describe_table(conn, "users", "h2")
        assert conn.cursors == []

    @pytest.mark.parametrize("table", ["", None])
    def test_empty_table_name(self, table):
        """Test an empty table name is rejected before querying."""
        conn = FakeConnection()
        with pytest.raises(ValidationError) as exc_info:
            introspect.describe_table(conn, table, "postgres")

        assert exc_info.value.message == "table name cannot be empty"
        assert conn.cursors == []

    def test_unsupported_checked_before_table_name(self):
        """Test the dialect is validated first."""
        with pytest.raises(UnsupportedDialect):
            introspect.describe_table(FakeConnection(), "", "h2")

    def test_unknown_scheme_by_dsn(self):
        """Test an unrecognized scheme fails as an unparseable DSN."""
        conn = FakeConnection()
        with pytest.raises(ConnectionStringParseError) as exc_info:
            introspect.describe_table_for_dsn(conn, "test_table", "unsupported://localhost/test")

        assert "failed to parse DSN" in exc_info.value.message
        assert conn.cursors == []

    def test_recognized_driver_without_dialect_by_dsn(self):
        """Test a recognized driver with no introspector is unsupported."""
        conn = FakeConnection()
        with pytest.raises(UnsupportedDialect) as exc_info:
            introspect.describe_table_for_dsn(conn, "test_table", "adodb://localhost/test")

        assert "unsupported database driver" in exc_info.value.message
        assert conn.cursors == []

    def test_dispatches_by_dsn(self):
        """Test the DSN's scheme selects the introspector."""
        conn = FakeConnection(rows=[("ID", "NUMBER", False, None, True)])
        columns = introspect.describe_table_for_dsn(conn, "users", "snowflake://acct/db/public")

        assert columns[0].name == "ID"
        assert conn.last_cursor.executed[0][1] == ("USERS", "USERS")


class TestListTables:
    """Test list dispatch."""

    def test_unknown_token_names_operation(self):
        """Test the listing operation is named in the error."""
        with pytest.raises(UnsupportedDialect) as exc_info:
            introspect.list_tables(FakeConnection(), "vertica")
        assert "table listing" in exc_info.value.message

    def test_dispatches_by_dsn(self, sqlite_test_table, sqlite_path):
        """Test listing through a DSN."""
        assert introspect.list_tables_for_dsn(sqlite_test_table, f"sqlite3://{sqlite_path}") == ["test_table"]


class TestDescribeDatabase:
    """Test whole-database description."""

    def test_sqlite(self, sqlite_test_table):
        """Test every table is described."""
        sqlite_test_table.execute("CREATE TABLE tags (tag TEXT PRIMARY KEY)")
        schema = introspect.describe_database(sqlite_test_table, "sqlite3")

        assert schema.dialect == "sqlite"
        assert schema.table_count == 2
        tables = {t.name: t for t in schema.tables}
        assert tables["tags"].primary_key_columns == ["tag"]
        assert len(tables["test_table"].columns) == 4

    def test_failure_aborts(self):
        """Test a failing table aborts the whole description."""
        conn = FakeConnection(execute_error=RuntimeError("boom"))
        with pytest.raises(CatalogQueryError):
            introspect.describe_database(conn, Dialect.MYSQL)
