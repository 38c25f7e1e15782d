"""Abstract base class for per-dialect catalog introspection."""

import logging
from abc import ABC, abstractmethod
from numbers import Integral
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from usql_mcp.errors import CatalogQueryError, RowIterationError, RowScanError
from .dialects import Dialect
from .models import Column

logger = logging.getLogger(__name__)

T = TypeVar("T")

# (sql, params); params is None when the statement takes no bind parameters
CatalogQuery = Tuple[str, Optional[Any]]


class DialectIntrospector(ABC):
    """Reads table and column metadata from one dialect's catalog.

    Subclasses own a single describe query, a single table-listing query and
    the normalization of one describe row into a ``Column``. Cursor handling
    and error classification live here so every dialect behaves the same way
    on failure: the cursor is always closed, and a failed ``execute``, an
    undecodable row and a failed fetch raise distinct errors.

    Introspectors hold no state and may be shared between concurrent calls;
    the connection handle is supplied per call.
    """

    dialect: Dialect
    label: str

    # Catalog query listing base tables in the connection's default scope
    LIST_TABLES_SQL: str

    @abstractmethod
    def describe_query(self, table: str) -> CatalogQuery:
        """Build the catalog query that describes ``table``."""

    @abstractmethod
    def _to_column(self, row: Sequence[Any]) -> Column:
        """Normalize one describe row.

        Raises:
            TypeError, ValueError: If the row does not have the expected shape
        """

    def describe_table(self, connection: Any, table: str) -> List[Column]:
        """Describe the columns of a table, in catalog ordinal order.

        Args:
            connection: DB-API connection for this dialect's driver
            table: Table name (trusted identifier)

        Returns:
            List of Column objects, empty when the catalog reports no rows
        """
        logger.debug("Describing %s table %s", self.label, table)
        sql, params = self.describe_query(table)
        return self._run(
            connection,
            sql,
            params,
            self._to_column,
            table=table,
            action=f"describe {self.label} table",
            scan_what=f"{self.label} table schema",
        )

    def list_tables(self, connection: Any) -> List[str]:
        """List base tables, excluding views and the engine's own tables."""
        logger.debug("Listing %s tables", self.label)
        return self._run(
            connection,
            self.LIST_TABLES_SQL,
            None,
            self._to_table_name,
            action=f"list {self.label} tables",
            scan_what="table name",
        )

    def _to_table_name(self, row: Sequence[Any]) -> str:
        (name,) = self._unpack(row, 1)
        return self._as_str(name, "table name")

    def _run(
        self,
        connection: Any,
        sql: str,
        params: Optional[Any],
        scan: Callable[[Sequence[Any]], T],
        action: str,
        scan_what: str,
        table: Optional[str] = None,
    ) -> List[T]:
        """Execute one catalog query and scan every row it returns."""
        try:
            cursor = connection.cursor()
        except Exception as e:
            raise CatalogQueryError(f"failed to {action}", self.dialect.value, table=table, cause=e) from e

        try:
            try:
                if params is None:
                    cursor.execute(sql)
                else:
                    cursor.execute(sql, params)
            except Exception as e:
                raise CatalogQueryError(f"failed to {action}", self.dialect.value, table=table, cause=e) from e

            results: List[T] = []
            while True:
                try:
                    row = cursor.fetchone()
                except Exception as e:
                    raise RowIterationError("row iteration error", self.dialect.value, table=table, cause=e) from e
                if row is None:
                    break
                try:
                    results.append(scan(row))
                except (TypeError, ValueError) as e:
                    raise RowScanError(f"failed to scan {scan_what}", self.dialect.value, table=table, cause=e) from e
            return results
        finally:
            self._close(cursor)

    def _close(self, cursor: Any) -> None:
        try:
            cursor.close()
        except Exception as e:
            logger.warning("Failed to close %s cursor: %s", self.label, e)

    # -- row decoding helpers ------------------------------------------------

    @staticmethod
    def _unpack(row: Sequence[Any], arity: int) -> Sequence[Any]:
        if len(row) != arity:
            raise ValueError(f"expected {arity} columns, got {len(row)}")
        return row

    @staticmethod
    def _as_str(value: Any, what: str) -> str:
        if not isinstance(value, str):
            raise TypeError(f"{what} must be a string, got {type(value).__name__}")
        return value

    @staticmethod
    def _as_bool(value: Any, what: str) -> bool:
        """Decode a boolean or 0/1 integer flag."""
        if isinstance(value, bool):
            return value
        if isinstance(value, Integral):
            return int(value) != 0
        raise TypeError(f"{what} must be a boolean flag, got {type(value).__name__}")

    @staticmethod
    def _as_int(value: Any, what: str) -> int:
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise TypeError(f"{what} must be an integer, got {type(value).__name__}")
        return int(value)

    @staticmethod
    def _as_default(value: Any) -> Optional[str]:
        """NULL and empty defaults are absent; anything else is kept literally."""
        if value is None:
            return None
        text = value if isinstance(value, str) else str(value)
        if text == "":
            return None
        return text
