"""usql-mcp - expose SQL databases to MCP clients."""

__version__ = "0.3.0"
