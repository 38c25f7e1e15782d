"""Passthrough statement executors.

Client SQL is forwarded to the driver verbatim. Result rows are plain dicts
keyed by column name.
"""

import logging
from typing import Any, Dict, List

from usql_mcp.errors import QueryError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def read_query(connection: Any, query: str) -> List[Row]:
    """Execute a SELECT query and return its rows."""
    cursor = connection.cursor()
    try:
        try:
            cursor.execute(query)
        except Exception as e:
            raise QueryError("failed to execute query", cause=e) from e

        if cursor.description is None:
            return []
        columns = [d[0] for d in cursor.description]

        try:
            rows = cursor.fetchall()
        except Exception as e:
            raise QueryError("row iteration error", cause=e) from e

        return [dict(zip(columns, row)) for row in rows]
    finally:
        _close(cursor)


def write_query(connection: Any, query: str) -> int:
    """Execute an INSERT, UPDATE, DELETE or ALTER query.

    Returns:
        Number of affected rows (0 when the driver cannot tell)
    """
    cursor = connection.cursor()
    try:
        try:
            cursor.execute(query)
        except Exception as e:
            raise QueryError("failed to execute query", cause=e) from e
        affected = cursor.rowcount
    finally:
        _close(cursor)

    _commit(connection)
    if affected is None or affected < 0:
        return 0
    return affected


def create_table(connection: Any, query: str) -> str:
    """Execute a CREATE TABLE statement and return a confirmation message."""
    cursor = connection.cursor()
    try:
        try:
            cursor.execute(query)
        except Exception as e:
            raise QueryError("failed to execute create table query", cause=e) from e
    finally:
        _close(cursor)

    _commit(connection)
    return "Table created successfully"


def _close(cursor: Any) -> None:
    try:
        cursor.close()
    except Exception as e:
        logger.warning("Failed to close cursor: %s", e)


def _commit(connection: Any) -> None:
    try:
        connection.commit()
    except Exception as e:
        raise QueryError("failed to commit", cause=e) from e
