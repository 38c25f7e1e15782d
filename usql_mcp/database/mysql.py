"""MySQL catalog introspector."""

from typing import Any, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column


class MySQLIntrospector(DialectIntrospector):
    """Introspects MySQL through ``information_schema.columns``.

    ``COLUMN_KEY = 'PRI'`` marks primary-key members. Comparison results come
    back as 0/1 integers.
    """

    dialect = Dialect.MYSQL
    label = "MySQL"

    DESCRIBE_SQL = """
        SELECT
            column_name,
            data_type,
            is_nullable = 'YES' AS nullable,
            column_default,
            column_key = 'PRI' AS is_primary_key
        FROM information_schema.columns
        WHERE table_name = %s
        ORDER BY ordinal_position;"""

    LIST_TABLES_SQL = (
        "SELECT table_name FROM information_schema.tables "
        "WHERE table_schema = DATABASE() AND table_type = 'BASE TABLE';"
    )

    def describe_query(self, table: str) -> CatalogQuery:
        return self.DESCRIBE_SQL, (table,)

    def _to_column(self, row: Sequence[Any]) -> Column:
        name, data_type, nullable, default, is_pk = self._unpack(row, 5)
        return Column(
            name=self._as_str(name, "column name"),
            type=self._as_str(data_type, "data type"),
            nullable=self._as_bool(nullable, "nullable"),
            default=self._as_default(default),
            is_primary_key=self._as_bool(is_pk, "is_primary_key"),
        )
