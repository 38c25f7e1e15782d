"""Table schema MCP resources for usql-mcp.

Each table's schema is addressable as ``usqlmcp://<table>/schema``.
"""

import json
from typing import List
from urllib.parse import unquote

from mcp.types import Resource, ResourceTemplate

from usql_mcp.database import introspect
from ..context import ServerContext
from usql_mcp.errors import ValidationError

URI_SCHEME = "usqlmcp://"
SCHEMA_URI_TEMPLATE = "usqlmcp://{table}/schema"
MIME_TYPE = "application/json"


def schema_uri(table: str) -> str:
    return SCHEMA_URI_TEMPLATE.format(table=table)


def parse_schema_uri(uri: str) -> str:
    """Extract the table name from a ``usqlmcp://<table>/schema`` URI.

    Raises:
        ValidationError: If the URI does not have that shape
    """
    if not uri.startswith(URI_SCHEME):
        raise ValidationError("invalid URI scheme, expected usqlmcp://", details={"uri": uri})

    parts = uri[len(URI_SCHEME):].split("/")
    if len(parts) != 2 or parts[1] != "schema":
        raise ValidationError("invalid URI format, expected usqlmcp://<table>/schema", details={"uri": uri})

    table = unquote(parts[0])
    if not table:
        raise ValidationError("table name cannot be empty", details={"uri": uri})
    return table


def get_schema_resources(ctx: ServerContext) -> List[Resource]:
    """One resource per table registered at startup."""
    return [
        Resource(
            uri=schema_uri(table),
            name=f"Schema for table {table}",
            mimeType=MIME_TYPE,
        )
        for table in ctx.table_resources
    ]


def get_schema_resource_templates() -> List[ResourceTemplate]:
    return [
        ResourceTemplate(
            uriTemplate=SCHEMA_URI_TEMPLATE,
            name="Table Schema",
            description="Returns the JSON schema for a given table, including column names and data types",
            mimeType=MIME_TYPE,
        ),
    ]


def register_table_resources(ctx: ServerContext) -> List[str]:
    """List the connected database's tables and remember them as resources."""
    tables = introspect.list_tables(ctx.require_connection(), ctx.driver)
    ctx.table_resources = list(tables)
    return ctx.table_resources


def read_schema_resource(ctx: ServerContext, uri: str) -> str:
    """Describe the table named by a schema URI as JSON."""
    table = parse_schema_uri(uri)
    columns = introspect.describe_table(ctx.require_connection(), table, ctx.driver)
    return json.dumps([col.to_dict() for col in columns], indent=2)
