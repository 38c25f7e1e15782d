"""Session state management for the usql-mcp server."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from usql_mcp.database.connection import open_connection
from usql_mcp.database.dialects import Dialect, classify, identify
from usql_mcp.errors import ConnectionError

logger = logging.getLogger(__name__)


@dataclass
class ServerContext:
    """Session context for the MCP server.

    Holds the single database connection every tool call shares, the DSN it
    was opened from, and the tables registered as concrete schema resources.
    """

    dsn: Optional[str] = None
    connection: Any = None

    # Driver token taken from the DSN (e.g. "sqlite3", "pgx")
    driver: Optional[str] = None

    # Tables registered as usqlmcp://<table>/schema resources at startup
    table_resources: List[str] = field(default_factory=list)

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    @property
    def dialect(self) -> Optional[Dialect]:
        """Introspection dialect of the connection, or None for other drivers."""
        if self.driver is None:
            return None
        return identify(self.driver)

    def connect(self, dsn: str, timeout: float = 5.0, connection: Any = None) -> Any:
        """Open (or adopt) the session's connection.

        Args:
            dsn: Connection string the connection belongs to
            timeout: Connect timeout in seconds, used when opening
            connection: An already-open DB-API connection to use instead

        Returns:
            The session connection
        """
        driver = classify(dsn)
        if connection is None:
            connection = open_connection(dsn, timeout=timeout)
        self.close()
        self.dsn = dsn
        self.driver = driver
        self.connection = connection
        return connection

    def require_connection(self) -> Any:
        """Return the session connection, failing when none is open."""
        if self.connection is None:
            raise ConnectionError("No database connection. Start the server with --dsn or DB_DSN.")
        return self.connection

    def require_dsn(self) -> str:
        if self.dsn is None:
            raise ConnectionError("No DSN configured. Start the server with --dsn or DB_DSN.")
        return self.dsn

    def close(self):
        """Close the session connection."""
        if self.connection is not None:
            try:
                self.connection.close()
            except Exception as e:
                logger.warning("Failed to close database connection: %s", e)
            self.connection = None

    def reset(self):
        """Reset all session state."""
        self.close()
        self.dsn = None
        self.driver = None
        self.table_resources.clear()


# Global context instance for the MCP server session
_context: Optional[ServerContext] = None


def get_context() -> ServerContext:
    """Get or create the global server context."""
    global _context
    if _context is None:
        _context = ServerContext()
    return _context


def reset_context():
    """Reset the global server context."""
    global _context
    if _context:
        _context.reset()
    _context = ServerContext()
