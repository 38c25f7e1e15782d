"""ClickHouse catalog introspector."""

from typing import Any, Sequence

from .base import CatalogQuery, DialectIntrospector
from .dialects import Dialect
from .models import Column

NULLABLE_WRAPPER = "Nullable("


class ClickHouseIntrospector(DialectIntrospector):
    """Introspects ClickHouse through ``DESCRIBE TABLE``.

    ClickHouse has no primary-key constraint in the relational sense (its
    sorting key is not one), so no column is ever reported as a primary key.
    Nullability is carried by the ``Nullable(...)`` type wrapper.
    """

    dialect = Dialect.CLICKHOUSE
    label = "ClickHouse"

    LIST_TABLES_SQL = (
        "SELECT name FROM system.tables "
        "WHERE database = currentDatabase() AND engine NOT LIKE '%View'"
    )

    def describe_query(self, table: str) -> CatalogQuery:
        return f"DESCRIBE TABLE {table}", None

    def _to_column(self, row: Sequence[Any]) -> Column:
        # name, type, default_type, default_expression, comment, codec_expression, ttl_expression
        name, type_info, _default_type, default_expr, _comment, _codec, _ttl = self._unpack(row, 7)
        type_info = self._as_str(type_info, "column type")
        return Column(
            name=self._as_str(name, "column name"),
            type=type_info,
            nullable=NULLABLE_WRAPPER in type_info,
            default=self._as_default(default_expr),
            is_primary_key=False,
        )
