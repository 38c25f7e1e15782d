"""CLI commands for usql-mcp."""
