"""MCP server implementation for usql-mcp.

This module implements a Model Context Protocol (MCP) server that exposes
one database connection to a tool-calling client: query, write, create and
schema introspection tools, plus per-table schema resources.
"""

import json
import logging
from typing import Any, Iterable, Optional

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import (
    Tool,
    TextContent,
    Resource,
    ResourceTemplate,
)

from usql_mcp.config import settings
from usql_mcp.errors import MCPError
from .context import get_context, reset_context
from .resources import schema_resources
from .tools import database, query

logger = logging.getLogger(__name__)

# Create the MCP server instance
server = Server("usql-mcp")


# =============================================================================
# Tool Registration
# =============================================================================

@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available MCP tools."""
    tools = []

    # Schema tools
    tools.extend(database.get_tools())

    # Query tools
    tools.extend(query.get_tools())

    return tools


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    ctx = get_context()
    arguments = arguments or {}

    try:
        # Schema tools
        if name == "db_type":
            result = await database.db_type(ctx)
        elif name == "list_tables":
            result = await database.list_tables(ctx)
        elif name == "describe_table_schema":
            result = await database.describe_table_schema(ctx, arguments.get("table"))

        # Query tools
        elif name == "read_query":
            result = await query.read_query(ctx, arguments.get("query"))
        elif name == "write_query":
            result = await query.write_query(ctx, arguments.get("query"))
        elif name == "create_table":
            result = await query.create_table(ctx, arguments.get("query"))

        else:
            result = f"Unknown tool: {name}"

        return [TextContent(type="text", text=str(result))]

    except MCPError as e:
        logger.exception(f"Error in tool {name}")
        return [TextContent(type="text", text=f"Error: {json.dumps(e.to_dict())}")]
    except Exception as e:
        logger.exception(f"Error in tool {name}")
        return [TextContent(type="text", text=f"Error: {str(e)}")]


# =============================================================================
# Resource Registration
# =============================================================================

@server.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return schema_resources.get_schema_resources(get_context())


@server.list_resource_templates()
async def list_resource_templates() -> list[ResourceTemplate]:
    """List available resource templates."""
    return schema_resources.get_schema_resource_templates()


@server.read_resource()
async def read_resource(uri: Any) -> Iterable[ReadResourceContents]:
    """Read a resource by URI."""
    text = schema_resources.read_schema_resource(get_context(), str(uri))
    return [ReadResourceContents(content=text, mime_type=schema_resources.MIME_TYPE)]


# =============================================================================
# Server Lifecycle
# =============================================================================

def connect(dsn: str, timeout: Optional[float] = None):
    """Open the session connection and register table resources.

    Raises:
        ConnectionStringParseError: If the DSN cannot be parsed
        Exception: Whatever the driver raises when the connection fails
    """
    reset_context()
    ctx = get_context()
    ctx.connect(dsn, timeout=timeout if timeout is not None else settings.connect_timeout)

    if settings.register_table_resources:
        try:
            tables = schema_resources.register_table_resources(ctx)
            logger.info("Registered %d table schema resources", len(tables))
        except Exception as e:
            logger.warning("Failed to list tables for resource registration: %s", e)
    return ctx


async def run_server():
    """Run the MCP server over stdio using the current session context."""
    logger.info("Starting usql-mcp server...")

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )
    finally:
        get_context().close()


def main(dsn: Optional[str] = None):
    """Entry point for the MCP server."""
    import asyncio

    logging.basicConfig(level=settings.log_level.upper())
    dsn = dsn or settings.db_dsn
    if not dsn:
        raise ValueError("DSN is required. Provide it using --dsn flag or DB_DSN environment variable.")
    connect(dsn)
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
