"""MCP tools for usql-mcp."""

from . import database
from . import query

__all__ = [
    "database",
    "query",
]
