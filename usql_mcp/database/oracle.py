"""Oracle catalog introspector."""

from typing import Any, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column


class OracleIntrospector(DialectIntrospector):
    """Introspects Oracle through the ``ALL_*`` dictionary views.

    Oracle stores unquoted identifiers upper-cased, so the table name is
    matched with ``UPPER()``. Binds use python-oracledb's named style.
    """

    dialect = Dialect.ORACLE
    label = "Oracle"

    DESCRIBE_SQL = """
        SELECT
            c.COLUMN_NAME,
            c.DATA_TYPE,
            CASE WHEN c.NULLABLE = 'Y' THEN 1 ELSE 0 END AS nullable,
            c.DATA_DEFAULT,
            CASE WHEN pk.COLUMN_NAME IS NOT NULL THEN 1 ELSE 0 END AS is_primary_key
        FROM ALL_TAB_COLUMNS c
        LEFT JOIN (
            SELECT acc.COLUMN_NAME
            FROM ALL_CONSTRAINTS ac
            JOIN ALL_CONS_COLUMNS acc ON ac.CONSTRAINT_NAME = acc.CONSTRAINT_NAME
            WHERE ac.TABLE_NAME = UPPER(:table_name) AND ac.CONSTRAINT_TYPE = 'P'
        ) pk ON c.COLUMN_NAME = pk.COLUMN_NAME
        WHERE c.TABLE_NAME = UPPER(:table_name)
        ORDER BY c.COLUMN_ID"""

    LIST_TABLES_SQL = "SELECT table_name FROM user_tables"

    def describe_query(self, table: str) -> CatalogQuery:
        return self.DESCRIBE_SQL, {"table_name": table}

    def _to_column(self, row: Sequence[Any]) -> Column:
        name, data_type, nullable, default, is_pk = self._unpack(row, 5)
        return Column(
            name=self._as_str(name, "column name"),
            type=self._as_str(data_type, "data type"),
            nullable=self._as_int(nullable, "nullable") == 1,
            default=self._as_default(default),
            is_primary_key=self._as_int(is_pk, "is_primary_key") == 1,
        )
