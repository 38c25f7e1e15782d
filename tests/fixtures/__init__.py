"""Test fixtures package."""

from .fake_dbapi import FakeConnection, FakeCursor, FakeDriverError

__all__ = [
    "FakeConnection",
    "FakeCursor",
    "FakeDriverError",
]
