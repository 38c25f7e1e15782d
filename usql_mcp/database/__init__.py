"""Database introspection module for usql-mcp.

This module provides database-agnostic catalog introspection with one
introspector per supported dialect, plus passthrough query executors.
"""

from .models import Column, TableSchema, DatabaseSchema, TableColumnList, TableNameList
from .dialects import Dialect, ParsedDSN, parse_dsn, classify, identify, db_type
from .base import DialectIntrospector
from .sqlite import SQLiteIntrospector
from .postgres import PostgresIntrospector
from .mysql import MySQLIntrospector
from .sqlserver import SQLServerIntrospector
from .oracle import OracleIntrospector
from .clickhouse import ClickHouseIntrospector
from .duckdb import DuckDBIntrospector
from .snowflake import SnowflakeIntrospector
from .introspect import (
    INTROSPECTORS,
    get_introspector,
    describe_table,
    list_tables,
    describe_table_for_dsn,
    list_tables_for_dsn,
    describe_database,
)
from .queries import read_query, write_query, create_table
from .connection import open_connection

__all__ = [
    # Data models
    "Column",
    "TableSchema",
    "DatabaseSchema",
    "TableColumnList",
    "TableNameList",
    # Dialect identification
    "Dialect",
    "ParsedDSN",
    "parse_dsn",
    "classify",
    "identify",
    "db_type",
    # Introspectors
    "DialectIntrospector",
    "SQLiteIntrospector",
    "PostgresIntrospector",
    "MySQLIntrospector",
    "SQLServerIntrospector",
    "OracleIntrospector",
    "ClickHouseIntrospector",
    "DuckDBIntrospector",
    "SnowflakeIntrospector",
    # Dispatch
    "INTROSPECTORS",
    "get_introspector",
    "describe_table",
    "list_tables",
    "describe_table_for_dsn",
    "list_tables_for_dsn",
    "describe_database",
    # Passthrough executors
    "read_query",
    "write_query",
    "create_table",
    "open_connection",
]
