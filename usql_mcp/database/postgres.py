"""PostgreSQL catalog introspector."""

from typing import Any, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column


class PostgresIntrospector(DialectIntrospector):
    """Introspects PostgreSQL through ``information_schema`` and ``pg_index``.

    Primary-key membership comes from the table's primary index, resolved
    with a ``regclass`` cast of the table name. Queries use the psycopg2
    ``%s`` parameter style.
    """

    dialect = Dialect.POSTGRES
    label = "PostgreSQL"

    DESCRIBE_SQL = """
        SELECT
            column_name,
            data_type,
            is_nullable = 'YES' AS nullable,
            column_default,
            CASE WHEN column_name IN (
                SELECT a.attname
                FROM pg_index i
                JOIN pg_attribute a ON a.attrelid = i.indrelid AND a.attnum = ANY(i.indkey)
                WHERE i.indrelid = %s::regclass AND i.indisprimary
            ) THEN true ELSE false END AS is_primary_key
        FROM information_schema.columns
        WHERE table_name = %s
        ORDER BY ordinal_position;"""

    LIST_TABLES_SQL = (
        "SELECT table_name FROM information_schema.tables "
        "WHERE table_schema = 'public' AND table_type = 'BASE TABLE';"
    )

    def describe_query(self, table: str) -> CatalogQuery:
        return self.DESCRIBE_SQL, (table, table)

    def _to_column(self, row: Sequence[Any]) -> Column:
        name, data_type, nullable, default, is_pk = self._unpack(row, 5)
        return Column(
            name=self._as_str(name, "column name"),
            type=self._as_str(data_type, "data type"),
            nullable=self._as_bool(nullable, "nullable"),
            default=self._as_default(default),
            is_primary_key=self._as_bool(is_pk, "is_primary_key"),
        )
