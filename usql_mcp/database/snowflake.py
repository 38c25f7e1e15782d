"""Snowflake catalog introspector."""

from typing import Any, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column


class SnowflakeIntrospector(DialectIntrospector):
    """Introspects Snowflake through ``information_schema``.

    Snowflake folds unquoted identifiers to upper case, so the table name is
    upper-cased before it is bound.
    """

    dialect = Dialect.SNOWFLAKE
    label = "Snowflake"

    DESCRIBE_SQL = """
        SELECT
            column_name,
            data_type,
            is_nullable = 'YES' AS nullable,
            column_default,
            CASE WHEN column_name IN (
                SELECT column_name
                FROM information_schema.table_constraints tc
                JOIN information_schema.key_column_usage kcu ON tc.constraint_name = kcu.constraint_name
                WHERE tc.table_name = %s AND tc.constraint_type = 'PRIMARY KEY'
            ) THEN true ELSE false END AS is_primary_key
        FROM information_schema.columns
        WHERE table_name = %s
        ORDER BY ordinal_position;"""

    LIST_TABLES_SQL = "SELECT table_name FROM information_schema.tables WHERE table_type = 'BASE TABLE';"

    def describe_query(self, table: str) -> CatalogQuery:
        upper = table.upper()
        return self.DESCRIBE_SQL, (upper, upper)

    def _to_column(self, row: Sequence[Any]) -> Column:
        name, data_type, nullable, default, is_pk = self._unpack(row, 5)
        return Column(
            name=self._as_str(name, "column name"),
            type=self._as_str(data_type, "data type"),
            nullable=self._as_bool(nullable, "nullable"),
            default=self._as_default(default),
            is_primary_key=self._as_bool(is_pk, "is_primary_key"),
        )
