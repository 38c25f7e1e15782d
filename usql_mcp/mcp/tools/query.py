"""Query MCP tools for usql-mcp.

Read, write and CREATE TABLE statements are forwarded to the database as-is.
"""

import json
from typing import List

from mcp.types import Tool

from usql_mcp.database import queries
from ..context import ServerContext
from usql_mcp.errors import ValidationError


def _query_tool(name: str, description: str, query_description: str) -> Tool:
    return Tool(
        name=name,
        description=description,
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": query_description
                }
            },
            "required": ["query"]
        }
    )


def get_tools() -> List[Tool]:
    """Return all query tools."""
    return [
        _query_tool(
            "read_query",
            "Execute a SELECT query and return the results.",
            "The SELECT query to execute.",
        ),
        _query_tool(
            "write_query",
            "Execute an INSERT, UPDATE, DELETE, or ALTER query and return the number of affected rows.",
            "The query to execute.",
        ),
        _query_tool(
            "create_table",
            "Execute a CREATE TABLE query.",
            "The CREATE TABLE query to execute.",
        ),
    ]


def _require_query(query) -> str:
    if not isinstance(query, str):
        raise ValidationError("query must be a string")
    return query


async def read_query(ctx: ServerContext, query: str) -> str:
    """Run a SELECT and return its rows as JSON."""
    rows = queries.read_query(ctx.require_connection(), _require_query(query))
    return json.dumps(rows, default=str)


async def write_query(ctx: ServerContext, query: str) -> str:
    """Run a data-modifying statement and report the affected row count."""
    query = _require_query(query)
    affected = queries.write_query(ctx.require_connection(), query)

    if query.lstrip().upper().startswith("ALTER ") and affected == 0:
        return "ALTER query executed successfully, but no rows were affected."
    return f"{affected} rows affected"


async def create_table(ctx: ServerContext, query: str) -> str:
    """Run a CREATE TABLE statement."""
    return queries.create_table(ctx.require_connection(), _require_query(query))
