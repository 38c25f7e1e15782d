"""Error types for usql-mcp."""

from typing import Optional, Dict, Any


class MCPError(Exception):
    """Base exception for usql-mcp errors."""

    def __init__(self, message: str, code: str = "MCP_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for MCP response."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConnectionError(MCPError):
    """Error opening or using the database connection."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class ConnectionStringParseError(MCPError):
    """The connection string could not be parsed."""

    def __init__(self, message: str, dsn: Optional[str] = None):
        super().__init__(
            f"failed to parse DSN: {message}",
            code="DSN_PARSE_ERROR",
            details={"reason": message},
        )
        # The DSN may carry credentials, so it is kept off the details dict.
        self.dsn = dsn


class UnsupportedDialect(MCPError):
    """The driver token does not name one of the introspectable dialects."""

    def __init__(self, token: str, operation: Optional[str] = None):
        message = f"unsupported database driver: {token}"
        if operation:
            message = f"unsupported database driver for {operation}: {token}"
        super().__init__(
            message,
            code="UNSUPPORTED_DIALECT",
            details={"token": token, "operation": operation},
        )
        self.token = token


class IntrospectionError(MCPError):
    """Base class for failures while reading a catalog."""

    def __init__(
        self,
        message: str,
        code: str,
        dialect: str,
        table: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        details: Dict[str, Any] = {"dialect": dialect}
        if table is not None:
            details["table"] = table
        if cause is not None:
            details["cause"] = str(cause)
            message = f"{message}: {cause}"
        super().__init__(message, code=code, details=details)
        self.dialect = dialect
        self.table = table
        self.cause = cause


class CatalogQueryError(IntrospectionError):
    """The catalog query itself failed on the target system."""

    def __init__(self, message: str, dialect: str, table: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message, "CATALOG_QUERY_ERROR", dialect, table=table, cause=cause)


class RowScanError(IntrospectionError):
    """A catalog row did not have the shape the describer expects."""

    def __init__(self, message: str, dialect: str, table: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message, "ROW_SCAN_ERROR", dialect, table=table, cause=cause)


class RowIterationError(IntrospectionError):
    """The driver failed while fetching catalog rows."""

    def __init__(self, message: str, dialect: str, table: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message, "ROW_ITERATION_ERROR", dialect, table=table, cause=cause)


class QueryError(MCPError):
    """A passthrough read, write or create statement failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        details = {"cause": str(cause)} if cause is not None else {}
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, code="QUERY_ERROR", details=details)
        self.cause = cause


class ValidationError(MCPError):
    """Error during validation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)
