"""DuckDB catalog introspector."""

from typing import Any, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column


class DuckDBIntrospector(DialectIntrospector):
    """Introspects DuckDB through ``PRAGMA table_info``.

    DuckDB's pragma mirrors SQLite's but reports ``notnull`` and ``pk`` as
    booleans, and raises a catalog error for a table that does not exist.
    """

    dialect = Dialect.DUCKDB
    label = "DuckDB"

    LIST_TABLES_SQL = (
        "SELECT table_name FROM information_schema.tables "
        "WHERE table_schema = 'main' AND table_type = 'BASE TABLE';"
    )

    def describe_query(self, table: str) -> CatalogQuery:
        return f"PRAGMA table_info('{table}');", None

    def _to_column(self, row: Sequence[Any]) -> Column:
        _cid, name, type_info, notnull, default, pk = self._unpack(row, 6)
        return Column(
            name=self._as_str(name, "column name"),
            type=self._as_str(type_info, "column type"),
            nullable=not self._as_bool(notnull, "notnull"),
            default=self._as_default(default),
            is_primary_key=self._as_bool(pk, "pk"),
        )
