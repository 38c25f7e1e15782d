"""usql-mcp - Main entry point."""

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console

from .commands import schema
from .config import settings
from .database.dialects import db_type as get_db_type
from .errors import ConnectionStringParseError
from .mcp.server import connect, run_server

# Exit codes for `serve`
EXIT_MISSING_DSN = 100
EXIT_INVALID_DSN = 101
EXIT_CONNECT_FAILED = 102

app = typer.Typer(
    name="usql-mcp",
    help="Expose a SQL database to MCP clients",
    add_completion=False,
)

# Add subcommands
app.add_typer(schema.app, name="schema")

console = Console()
# stdout carries the MCP protocol while serving
err_console = Console(stderr=True)


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  DSN configured: {'Yes' if settings.db_dsn else 'No'}")
    console.print(f"  Connect timeout: {settings.connect_timeout}s")
    console.print(f"  Log level: {settings.log_level}")
    console.print(f"  Register table resources: {'Yes' if settings.register_table_resources else 'No'}")


@app.command("db-type")
def db_type(
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Database connection string (default: DB_DSN)"),
):
    """Show the database type of a connection string."""
    dsn = dsn or settings.db_dsn
    if not dsn:
        console.print("[red]Error: DSN is required. Provide it using --dsn flag or DB_DSN environment variable.[/red]")
        raise typer.Exit(1)
    try:
        console.print(get_db_type(dsn))
    except ConnectionStringParseError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Database connection string (default: DB_DSN)"),
):
    """Start the MCP server over stdio."""
    dsn = dsn or settings.db_dsn
    if not dsn:
        err_console.print("Error: DSN is required. Provide it using --dsn flag or DB_DSN environment variable.")
        raise typer.Exit(EXIT_MISSING_DSN)

    logging.basicConfig(level=settings.log_level.upper())

    try:
        connect(dsn)
    except ConnectionStringParseError as e:
        err_console.print(f"Error: Invalid DSN format. {e.message}")
        raise typer.Exit(EXIT_INVALID_DSN)
    except Exception as e:
        err_console.print(f"Error: Failed to open database. {e}")
        raise typer.Exit(EXIT_CONNECT_FAILED)

    asyncio.run(run_server())


@app.callback()
def main():
    """
    usql-mcp - Query and introspect SQL databases over MCP.

    Examples:

        usql-mcp serve --dsn sqlite3://app.db

        usql-mcp db-type --dsn postgres://localhost/app

        usql-mcp schema describe users --dsn duckdb:///data/warehouse.duckdb
    """
    pass


if __name__ == "__main__":
    app()
