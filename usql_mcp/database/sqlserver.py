"""SQL Server catalog introspector."""

from typing import Any, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column


class SQLServerIntrospector(DialectIntrospector):
    """Introspects SQL Server through ``INFORMATION_SCHEMA``.

    Columns are left-joined against the table's PRIMARY KEY constraint
    columns; a column with no match is not part of the key.
    """

    dialect = Dialect.SQLSERVER
    label = "SQL Server"

    DESCRIBE_SQL = """
        SELECT
            c.COLUMN_NAME,
            c.DATA_TYPE,
            CASE WHEN c.IS_NULLABLE = 'YES' THEN 1 ELSE 0 END AS nullable,
            c.COLUMN_DEFAULT,
            CASE WHEN pk.COLUMN_NAME IS NOT NULL THEN 1 ELSE 0 END AS is_primary_key
        FROM INFORMATION_SCHEMA.COLUMNS c
        LEFT JOIN (
            SELECT kcu.COLUMN_NAME
            FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
            JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu ON tc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
            WHERE tc.TABLE_NAME = %s AND tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
        ) pk ON c.COLUMN_NAME = pk.COLUMN_NAME
        WHERE c.TABLE_NAME = %s
        ORDER BY c.ORDINAL_POSITION;"""

    LIST_TABLES_SQL = "SELECT table_name FROM information_schema.tables WHERE table_type = 'BASE TABLE';"

    def describe_query(self, table: str) -> CatalogQuery:
        return self.DESCRIBE_SQL, (table, table)

    def _to_column(self, row: Sequence[Any]) -> Column:
        name, data_type, nullable, default, is_pk = self._unpack(row, 5)
        return Column(
            name=self._as_str(name, "column name"),
            type=self._as_str(data_type, "data type"),
            nullable=self._as_int(nullable, "nullable") == 1,
            default=self._as_default(default),
            is_primary_key=self._as_int(is_pk, "is_primary_key") == 1,
        )
