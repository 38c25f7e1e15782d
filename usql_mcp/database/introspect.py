"""Dialect dispatch for catalog introspection.

Every ``Dialect`` maps to exactly one introspector. A token outside that
closed set is rejected with ``UnsupportedDialect`` before any query runs.
"""

import logging
from typing import Any, Dict, List, Type, Union

from usql_mcp.errors import UnsupportedDialect, ValidationError
from .base import DialectIntrospector
from .clickhouse import ClickHouseIntrospector
from .dialects import Dialect, classify, identify
from .duckdb import DuckDBIntrospector
from .models import Column, DatabaseSchema, TableSchema
from .mysql import MySQLIntrospector
from .oracle import OracleIntrospector
from .postgres import PostgresIntrospector
from .snowflake import SnowflakeIntrospector
from .sqlite import SQLiteIntrospector
from .sqlserver import SQLServerIntrospector

logger = logging.getLogger(__name__)

INTROSPECTORS: Dict[Dialect, Type[DialectIntrospector]] = {
    Dialect.SQLITE: SQLiteIntrospector,
    Dialect.POSTGRES: PostgresIntrospector,
    Dialect.MYSQL: MySQLIntrospector,
    Dialect.SQLSERVER: SQLServerIntrospector,
    Dialect.ORACLE: OracleIntrospector,
    Dialect.CLICKHOUSE: ClickHouseIntrospector,
    Dialect.DUCKDB: DuckDBIntrospector,
    Dialect.SNOWFLAKE: SnowflakeIntrospector,
}


def get_introspector(dialect: Union[Dialect, str], operation: str = "introspection") -> DialectIntrospector:
    """Return the introspector for a dialect or raw driver token.

    Raises:
        UnsupportedDialect: If the token is not one of the supported dialects
    """
    if isinstance(dialect, Dialect):
        resolved = dialect
    else:
        resolved = identify(str(dialect))
        if resolved is None:
            raise UnsupportedDialect(str(dialect), operation=operation)
    return INTROSPECTORS[resolved]()


def describe_table(connection: Any, table_name: str, dialect: Union[Dialect, str]) -> List[Column]:
    """Describe a table's columns in catalog order.

    Args:
        connection: DB-API connection for the dialect's driver
        table_name: Name of the table (trusted identifier)
        dialect: Dialect or raw driver token

    Returns:
        List of Column objects; empty when the catalog has no rows for the table
    """
    introspector = get_introspector(dialect)
    if not isinstance(table_name, str) or not table_name:
        raise ValidationError("table name cannot be empty", details={"dialect": introspector.dialect.value})
    logger.debug("Dispatching describe of %s to %s", table_name, type(introspector).__name__)
    return introspector.describe_table(connection, table_name)


def list_tables(connection: Any, dialect: Union[Dialect, str]) -> List[str]:
    """List base tables visible to the connection."""
    introspector = get_introspector(dialect, operation="table listing")
    logger.debug("Dispatching table listing to %s", type(introspector).__name__)
    return introspector.list_tables(connection)


def describe_table_for_dsn(connection: Any, table_name: str, dsn: str) -> List[Column]:
    """Describe a table, taking the dialect from the connection string."""
    return describe_table(connection, table_name, classify(dsn))


def list_tables_for_dsn(connection: Any, dsn: str) -> List[str]:
    """List base tables, taking the dialect from the connection string."""
    return list_tables(connection, classify(dsn))


def describe_database(connection: Any, dialect: Union[Dialect, str]) -> DatabaseSchema:
    """Describe every base table visible to the connection.

    The first failing table aborts the whole call.
    """
    introspector = get_introspector(dialect)
    tables = [
        TableSchema(name=name, columns=introspector.describe_table(connection, name))
        for name in introspector.list_tables(connection)
    ]
    return DatabaseSchema(dialect=introspector.dialect.value, tables=tables)
