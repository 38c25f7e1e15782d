"""Canonical schema models produced by catalog introspection."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Column:
    """One column of a table, as reported by the source catalog.

    ``type`` is the source system's own type name and is not normalized
    across dialects. ``default`` is None when the catalog reports no default
    expression; otherwise it is the literal expression, quotes included.
    """
    name: str
    type: str
    nullable: bool
    default: Optional[str] = None
    is_primary_key: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output, omitting an absent default."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "nullable": self.nullable,
        }
        if self.default is not None:
            data["default"] = self.default
        data["is_primary_key"] = self.is_primary_key
        return data


# Ordered by catalog ordinal position, never re-sorted.
TableColumnList = List[Column]

# Base tables in the connection's default scope; order is not significant.
TableNameList = List[str]


@dataclass(frozen=True)
class TableSchema:
    """A table and its columns."""
    name: str
    columns: List[Column] = field(default_factory=list)

    @property
    def primary_key_columns(self) -> List[str]:
        return [c.name for c in self.columns if c.is_primary_key]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
            "primary_keys": self.primary_key_columns,
        }


@dataclass(frozen=True)
class DatabaseSchema:
    """Every base table visible to a connection."""
    dialect: str
    tables: List[TableSchema] = field(default_factory=list)

    @property
    def table_count(self) -> int:
        return len(self.tables)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dialect": self.dialect,
            "table_count": self.table_count,
            "tables": [t.to_dict() for t in self.tables],
        }
