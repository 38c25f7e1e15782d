"""SQLite catalog introspector."""

from typing import Any, Dict, List, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column


class SQLiteIntrospector(DialectIntrospector):
    """Introspects SQLite through ``PRAGMA table_info``.

    PRAGMA arguments cannot be bound, so the table name is interpolated
    into the statement as-is.
    """

    dialect = Dialect.SQLITE
    label = "SQLite"

    # sqlite_% is reserved for the engine's own tables (sqlite_sequence, ...)
    LIST_TABLES_SQL = "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%';"

    def describe_query(self, table: str) -> CatalogQuery:
        return f"PRAGMA table_info({table});", None

    def _to_column(self, row: Sequence[Any]) -> Column:
        _cid, name, type_info, notnull, default, pk = self._unpack(row, 6)
        return Column(
            name=self._as_str(name, "column name"),
            type=self._as_str(type_info, "column type"),
            # An INTEGER PRIMARY KEY has notnull=0, so it reports nullable
            nullable=not self._as_bool(notnull, "notnull"),
            default=self._as_default(default),
            is_primary_key=self._as_int(pk, "pk") > 0,
        )

    def table_info(self, connection: Any, table: str) -> List[Dict[str, Any]]:
        """Return the raw ``PRAGMA table_info`` rows for a table.

        Each row is a dict with ``cid``, ``name``, ``type``, ``notnull``,
        ``default`` (empty string when the column has none) and
        ``primary_key``.
        """
        sql, params = self.describe_query(table)
        return self._run(
            connection,
            sql,
            params,
            self._to_table_info,
            table=table,
            action="describe table",
            scan_what="table schema",
        )

    def _to_table_info(self, row: Sequence[Any]) -> Dict[str, Any]:
        cid, name, type_info, notnull, default, pk = self._unpack(row, 6)
        return {
            "cid": self._as_int(cid, "cid"),
            "name": self._as_str(name, "column name"),
            "type": self._as_str(type_info, "column type"),
            "notnull": self._as_int(notnull, "notnull"),
            "default": "" if default is None else str(default),
            "primary_key": self._as_int(pk, "pk"),
        }
