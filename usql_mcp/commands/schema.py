"""Schema inspection commands."""

import json
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import settings
from ..database import introspect
from ..database.connection import open_connection
from ..database.dialects import Dialect, classify, identify
from ..database.models import Column
from ..database.sqlite import SQLiteIntrospector
from ..errors import MCPError

app = typer.Typer(help="Schema inspection commands")
console = Console()


def _resolve_dsn(dsn: Optional[str]) -> str:
    dsn = dsn or settings.db_dsn
    if not dsn:
        console.print("[red]Error: DSN is required. Provide it using --dsn flag or DB_DSN environment variable.[/red]")
        raise typer.Exit(1)
    return dsn


def _open(dsn: str) -> Any:
    try:
        return open_connection(dsn, timeout=settings.connect_timeout)
    except Exception as e:
        console.print(f"[red]Error opening database: {e}[/red]")
        raise typer.Exit(1)


def _columns_table(title: str, columns: List[Column]) -> Table:
    output = Table(title=title)
    output.add_column("Column", style="cyan")
    output.add_column("Type", style="green")
    output.add_column("Nullable")
    output.add_column("Default")
    output.add_column("PK")

    for col in columns:
        output.add_row(
            col.name,
            col.type,
            "yes" if col.nullable else "no",
            col.default if col.default is not None else "",
            "yes" if col.is_primary_key else "",
        )
    return output


@app.command("tables")
def list_tables(
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Database connection string (default: DB_DSN)"),
):
    """List base tables."""
    dsn = _resolve_dsn(dsn)
    connection = _open(dsn)

    try:
        tables = introspect.list_tables(connection, classify(dsn))
    except MCPError as e:
        console.print(f"[red]Error listing tables: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        connection.close()

    if not tables:
        console.print("[yellow]No tables found.[/yellow]")
        return

    for name in sorted(tables):
        console.print(f"  {name}")


@app.command("describe")
def describe_table(
    table: str = typer.Argument(..., help="Table name"),
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Database connection string (default: DB_DSN)"),
    as_json: bool = typer.Option(False, "--json", help="Print the schema as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Print SQLite's PRAGMA table_info rows as JSON"),
):
    """Describe a table's columns."""
    dsn = _resolve_dsn(dsn)
    if raw and identify(classify(dsn)) != Dialect.SQLITE:
        console.print("[red]Error: --raw is only available for SQLite databases.[/red]")
        raise typer.Exit(1)

    connection = _open(dsn)

    try:
        if raw:
            rows = SQLiteIntrospector().table_info(connection, table)
        else:
            columns = introspect.describe_table(connection, table, classify(dsn))
    except MCPError as e:
        console.print(f"[red]Error describing table: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        connection.close()

    if raw:
        console.print_json(json.dumps(rows))
        return

    if as_json:
        console.print_json(json.dumps([col.to_dict() for col in columns]))
        return

    if not columns:
        console.print(f"[yellow]No columns found for {table}.[/yellow]")
        return

    console.print(_columns_table(f"Table {table}", columns))


@app.command("dump")
def dump_schema(
    dsn: Optional[str] = typer.Option(None, "--dsn", help="Database connection string (default: DB_DSN)"),
    as_json: bool = typer.Option(False, "--json", help="Print the schema as JSON"),
):
    """Describe every base table in the database."""
    dsn = _resolve_dsn(dsn)
    connection = _open(dsn)

    try:
        schema = introspect.describe_database(connection, classify(dsn))
    except MCPError as e:
        console.print(f"[red]Error describing database: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        connection.close()

    if as_json:
        console.print_json(json.dumps(schema.to_dict()))
        return

    if not schema.tables:
        console.print("[yellow]No tables found.[/yellow]")
        return

    console.print(f"[bold]{schema.dialect}[/bold]: {schema.table_count} tables")
    for table in sorted(schema.tables, key=lambda t: t.name):
        console.print(_columns_table(f"Table {table.name}", table.columns))
