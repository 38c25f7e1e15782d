"""Schema MCP tools for usql-mcp.

Provides tools for identifying the database type, listing tables and
describing table schemas.
"""

import json
from typing import List

from mcp.types import Tool

from usql_mcp.database import introspect
from usql_mcp.database.dialects import db_type as get_db_type
from ..context import ServerContext
from usql_mcp.errors import ValidationError


def get_tools() -> List[Tool]:
    """Return all schema-related tools."""
    return [
        Tool(
            name="db_type",
            description="Get the database type based on the DSN.",
            inputSchema={
                "type": "object",
                "properties": {},
            }
        ),
        Tool(
            name="list_tables",
            description="List the base tables in the connected database, excluding views and system tables.",
            inputSchema={
                "type": "object",
                "properties": {},
            }
        ),
        Tool(
            name="describe_table_schema",
            description="Get the JSON schema for a given table, including column names and data types, for all supported databases.",
            inputSchema={
                "type": "object",
                "properties": {
                    "table": {
                        "type": "string",
                        "description": "The name of the table to describe."
                    }
                },
                "required": ["table"]
            }
        ),
    ]


async def db_type(ctx: ServerContext) -> str:
    """Return the human-readable database type of the session DSN."""
    return get_db_type(ctx.require_dsn())


async def list_tables(ctx: ServerContext) -> str:
    """List base tables of the connected database."""
    connection = ctx.require_connection()
    tables = introspect.list_tables(connection, ctx.driver)

    return json.dumps({
        "dialect": ctx.dialect.value,
        "tables": tables,
        "count": len(tables),
    })


async def describe_table_schema(ctx: ServerContext, table: str) -> str:
    """Describe a table as a JSON array of column records."""
    if not isinstance(table, str):
        raise ValidationError("table must be a string")

    connection = ctx.require_connection()
    columns = introspect.describe_table(connection, table, ctx.driver)

    return json.dumps([col.to_dict() for col in columns], indent=2)
