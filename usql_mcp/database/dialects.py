"""Connection-string classification and dialect identification."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
from urllib.parse import parse_qsl, unquote, urlsplit

from usql_mcp.errors import ConnectionStringParseError


class Dialect(str, Enum):
    """Database families with a catalog introspector."""
    SQLITE = "sqlite"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLSERVER = "sqlserver"
    ORACLE = "oracle"
    CLICKHOUSE = "clickhouse"
    DUCKDB = "duckdb"
    SNOWFLAKE = "snowflake"


# Recognized URL schemes -> driver token. Several schemes resolve to one
# driver, and a few engines are reachable through more than one driver
# implementation. A scheme missing here is not a connection string at all.
SCHEME_ALIASES: Dict[str, str] = {
    "adodb": "adodb", "ad": "adodb", "ado": "adodb",
    "avatica": "avatica", "av": "avatica",
    "bigquery": "bigquery", "bq": "bigquery",
    "postgres": "postgres", "postgresql": "postgres", "pg": "postgres",
    "pgsql": "postgres", "pq": "postgres",
    "pgx": "pgx", "px": "pgx",
    "mysql": "mysql", "my": "mysql", "maria": "mysql", "mariadb": "mysql",
    "aurora": "mysql", "percona": "mysql",
    "mymysql": "mymysql", "zm": "mymysql", "mymy": "mymysql",
    "sqlite": "sqlite3", "sqlite3": "sqlite3", "file": "sqlite3", "sq": "sqlite3",
    "moderncsqlite": "moderncsqlite", "modernsqlite": "moderncsqlite", "mq": "moderncsqlite",
    "sqlserver": "sqlserver", "mssql": "sqlserver", "ms": "sqlserver", "azuresql": "sqlserver",
    "oracle": "oracle", "or": "oracle", "ora": "oracle", "oci": "oracle", "oci8": "oracle",
    "godror": "godror", "gr": "godror",
    "clickhouse": "clickhouse", "ch": "clickhouse",
    "duckdb": "duckdb", "dk": "duckdb", "ddb": "duckdb",
    "snowflake": "snowflake", "sf": "snowflake",
    "spanner": "spanner", "sp": "spanner",
    "cassandra": "cassandra", "ca": "cassandra", "scy": "cassandra", "scylla": "cassandra",
    "couchbase": "couchbase", "n1": "couchbase", "n1ql": "couchbase",
    "dynamodb": "dynamodb", "dy": "dynamodb", "dyn": "dynamodb",
    "firebird": "firebird", "fb": "firebird",
    "h2": "h2",
    "hive": "hive", "hi": "hive",
    "odbc": "odbc", "od": "odbc",
    "presto": "presto", "prestodb": "presto", "pr": "presto",
    "trino": "trino", "tr": "trino",
    "vertica": "vertica", "ve": "vertica",
}

_DRIVER_DIALECTS: Dict[str, Dialect] = {
    "sqlite": Dialect.SQLITE,
    "sqlite3": Dialect.SQLITE,
    "moderncsqlite": Dialect.SQLITE,
    "postgres": Dialect.POSTGRES,
    "pgx": Dialect.POSTGRES,
    "mysql": Dialect.MYSQL,
    "mymysql": Dialect.MYSQL,
    "sqlserver": Dialect.SQLSERVER,
    "oracle": Dialect.ORACLE,
    "godror": Dialect.ORACLE,
    "clickhouse": Dialect.CLICKHOUSE,
    "duckdb": Dialect.DUCKDB,
    "snowflake": Dialect.SNOWFLAKE,
}

DISPLAY_NAMES: Dict[str, str] = {
    "postgres": "PostgreSQL",
    "pgx": "PostgreSQL",
    "mysql": "MySQL",
    "mymysql": "MySQL",
    "sqlite": "SQLite",
    "sqlite3": "SQLite",
    "moderncsqlite": "SQLite",
    "sqlserver": "SQL Server",
    "oracle": "Oracle",
    "godror": "Oracle",
    "clickhouse": "ClickHouse",
    "cassandra": "Cassandra",
    "couchbase": "Couchbase",
    "dynamodb": "DynamoDB",
    "duckdb": "DuckDB",
    "firebird": "Firebird",
    "h2": "H2",
    "hive": "Hive",
    "mssql": "Microsoft SQL Server",
    "odbc": "ODBC",
    "presto": "Presto",
    "snowflake": "Snowflake",
    "trino": "Trino",
    "vertica": "Vertica",
}


@dataclass(frozen=True)
class ParsedDSN:
    """A connection string split into its parts."""
    dsn: str
    scheme: str
    driver: str
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None
    path: str = ""
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def database(self) -> str:
        """Database name for server dialects (path without the leading slash)."""
        return self.path.lstrip("/")

    @property
    def file_path(self) -> str:
        """Filesystem path for file-based dialects."""
        if self.host:
            return self.host + self.path
        return self.path


def parse_dsn(dsn: str) -> ParsedDSN:
    """Parse a URL-style connection string.

    Raises:
        ConnectionStringParseError: If the DSN is empty, has no scheme or its
            scheme is not a recognized database scheme
    """
    if not dsn or not dsn.strip():
        raise ConnectionStringParseError("empty connection string", dsn=dsn)

    parts = urlsplit(dsn.strip())
    if not parts.scheme:
        raise ConnectionStringParseError("missing scheme", dsn=dsn)

    scheme = parts.scheme.lower()
    # "mysql+unix" style transport suffixes do not change the driver
    base_scheme = scheme.split("+", 1)[0]
    driver = SCHEME_ALIASES.get(base_scheme)
    if driver is None:
        raise ConnectionStringParseError(f"unknown database scheme: {base_scheme}", dsn=dsn)

    try:
        port = parts.port
    except ValueError as e:
        # ":memory:" style file names look like a host with a bad port
        if driver not in ("sqlite3", "moderncsqlite", "duckdb"):
            raise ConnectionStringParseError(str(e), dsn=dsn) from e
        port = None
        host = parts.netloc
    else:
        host = parts.hostname
        if driver in ("sqlite3", "moderncsqlite", "duckdb"):
            host = parts.netloc

    return ParsedDSN(
        dsn=dsn,
        scheme=scheme,
        driver=driver,
        host=host or None,
        port=port,
        username=unquote(parts.username) if parts.username else None,
        password=unquote(parts.password) if parts.password else None,
        path=unquote(parts.path),
        params=dict(parse_qsl(parts.query)),
    )


def classify(dsn: str) -> str:
    """Return the driver token for a connection string."""
    return parse_dsn(dsn).driver


def identify(token: str) -> Optional[Dialect]:
    """Map a driver token to its dialect, or None when it is not introspectable."""
    return _DRIVER_DIALECTS.get(token.lower())


def db_type(dsn: str) -> str:
    """Human-readable database type for a connection string."""
    token = classify(dsn)
    name = DISPLAY_NAMES.get(token.lower())
    if name:
        return name
    return token.title()
