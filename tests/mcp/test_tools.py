"""Tests for the schema and query MCP tools."""

import json

import pytest

from usql_mcp.errors import ConnectionError, QueryError, UnsupportedDialect, ValidationError
from usql_mcp.mcp.context import ServerContext
from usql_mcp.mcp.tools import database, query
from tests.fixtures import FakeConnection


class TestToolDefinitions:
    """Test tool metadata."""

    def test_schema_tools(self):
        """Test the schema tool names and required arguments."""
        tools = {t.name: t for t in database.get_tools()}
        assert set(tools) == {"db_type", "list_tables", "describe_table_schema"}
        assert tools["describe_table_schema"].inputSchema["required"] == ["table"]

    def test_query_tools(self):
        """Test every query tool requires a query string."""
        tools = query.get_tools()
        assert [t.name for t in tools] == ["read_query", "write_query", "create_table"]
        for tool in tools:
            assert tool.inputSchema["required"] == ["query"]


class TestSchemaTools:
    """Test db_type, list_tables and describe_table_schema."""

    @pytest.mark.asyncio
    async def test_db_type(self, server_context):
        """Test the type of the session DSN."""
        assert await database.db_type(server_context) == "SQLite"

    @pytest.mark.asyncio
    async def test_db_type_mssql_scheme(self):
        """Test the mssql scheme reports SQL Server."""
        ctx = ServerContext()
        ctx.connect("mssql://sa@localhost/master", connection=FakeConnection())
        assert await database.db_type(ctx) == "SQL Server"

    @pytest.mark.asyncio
    async def test_list_tables(self, server_context):
        """Test the listing payload."""
        result = json.loads(await database.list_tables(server_context))
        assert result == {"dialect": "sqlite", "tables": ["test_table"], "count": 1}

    @pytest.mark.asyncio
    async def test_describe_table_schema(self, server_context):
        """Test the column records and their serialized form."""
        result = json.loads(await database.describe_table_schema(server_context, "test_table"))

        assert [c["name"] for c in result] == ["id", "name", "age", "email"]
        assert result[0] == {"name": "id", "type": "INTEGER", "nullable": True, "is_primary_key": True}
        assert "default" not in result[2]
        assert result[3]["default"] == "'no-email'"

    @pytest.mark.asyncio
    async def test_describe_missing_table(self, server_context):
        """Test a missing SQLite table describes as an empty array."""
        assert json.loads(await database.describe_table_schema(server_context, "nope")) == []

    @pytest.mark.asyncio
    async def test_describe_requires_string(self, server_context):
        """Test a non-string table argument is rejected."""
        with pytest.raises(ValidationError):
            await database.describe_table_schema(server_context, None)

    @pytest.mark.asyncio
    async def test_describe_unsupported_driver(self):
        """Test a connection to a non-introspectable driver."""
        ctx = ServerContext()
        conn = FakeConnection()
        ctx.connect("vertica://localhost/db", connection=conn)

        with pytest.raises(UnsupportedDialect):
            await database.describe_table_schema(ctx, "users")
        assert conn.cursors == []

    @pytest.mark.asyncio
    async def test_no_connection(self, empty_context):
        """Test tools fail without a session connection."""
        with pytest.raises(ConnectionError):
            await database.list_tables(empty_context)


class TestQueryTools:
    """Test read_query, write_query and create_table."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, server_context):
        """Test inserted rows come back from a SELECT."""
        message = await query.write_query(
            server_context, "INSERT INTO test_table (name, age) VALUES ('ann', 31)"
        )
        assert message == "1 rows affected"

        rows = json.loads(await query.read_query(server_context, "SELECT name, age FROM test_table"))
        assert rows == [{"name": "ann", "age": 31}]

    @pytest.mark.asyncio
    async def test_read_non_json_values(self, server_context):
        """Test values JSON cannot encode natively are stringified."""
        rows = json.loads(await query.read_query(server_context, "SELECT x'414243' AS raw"))
        assert rows == [{"raw": str(b"ABC")}]

    @pytest.mark.asyncio
    async def test_alter_message(self, server_context):
        """Test ALTER statements without affected rows get their own message."""
        message = await query.write_query(server_context, "ALTER TABLE test_table ADD COLUMN city TEXT")
        assert message == "ALTER query executed successfully, but no rows were affected."

    @pytest.mark.asyncio
    async def test_alter_message_case_insensitive(self, server_context):
        """Test lower-case ALTER is recognized."""
        message = await query.write_query(server_context, "alter table test_table add column zip TEXT")
        assert message.startswith("ALTER query executed successfully")

    @pytest.mark.asyncio
    async def test_alter_message_leading_whitespace(self, server_context):
        """Test ALTER is recognized after leading whitespace."""
        message = await query.write_query(server_context, "  \n\tALTER TABLE test_table ADD COLUMN region TEXT")
        assert message == "ALTER query executed successfully, but no rows were affected."

    @pytest.mark.asyncio
    async def test_update_no_rows(self, server_context):
        """Test a non-ALTER statement reports zero rows plainly."""
        message = await query.write_query(server_context, "DELETE FROM test_table WHERE id = -1")
        assert message == "0 rows affected"

    @pytest.mark.asyncio
    async def test_create_table(self, server_context):
        """Test the created table shows up in the listing."""
        message = await query.create_table(server_context, "CREATE TABLE tags (tag TEXT PRIMARY KEY)")
        assert message == "Table created successfully"

        result = json.loads(await database.list_tables(server_context))
        assert set(result["tables"]) == {"test_table", "tags"}

    @pytest.mark.asyncio
    async def test_query_error(self, server_context):
        """Test a failing statement raises QueryError."""
        with pytest.raises(QueryError):
            await query.read_query(server_context, "SELECT * FROM missing")

    @pytest.mark.asyncio
    async def test_query_requires_string(self, server_context):
        """Test a missing query argument is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            await query.write_query(server_context, None)
        assert exc_info.value.message == "query must be a string"
