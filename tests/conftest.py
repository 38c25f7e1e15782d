"""Shared pytest fixtures for usql-mcp tests."""

import sqlite3

import pytest

from usql_mcp.mcp.context import ServerContext, reset_context


TEST_TABLE_DDL = """
CREATE TABLE test_table (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    age INTEGER,
    email TEXT DEFAULT 'no-email'
)
"""


@pytest.fixture
def sqlite_path(tmp_path):
    """Path of an empty SQLite database file."""
    return tmp_path / "test.db"


@pytest.fixture
def sqlite_connection(sqlite_path):
    """Open SQLite connection to a file database, closed after the test."""
    connection = sqlite3.connect(str(sqlite_path))
    yield connection
    connection.close()


@pytest.fixture
def sqlite_test_table(sqlite_connection):
    """SQLite connection holding the four-column ``test_table``."""
    sqlite_connection.execute(TEST_TABLE_DDL)
    sqlite_connection.commit()
    return sqlite_connection


@pytest.fixture
def server_context(sqlite_test_table, sqlite_path):
    """ServerContext bound to the SQLite ``test_table`` database."""
    ctx = ServerContext()
    ctx.connect(f"sqlite3://{sqlite_path}", connection=sqlite_test_table)
    return ctx


@pytest.fixture
def empty_context():
    """ServerContext with no DSN and no connection."""
    return ServerContext()


@pytest.fixture(autouse=True)
def _fresh_global_context():
    """Keep the global server context from leaking between tests."""
    reset_context()
    yield
    reset_context()
