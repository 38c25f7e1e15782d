"""MCP resources for usql-mcp."""

from . import schema_resources

__all__ = [
    "schema_resources",
]
