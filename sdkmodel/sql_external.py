"""Descriptions of tables reachable through external SQL connections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class SQLExternalColumn:
    """A column of an external table."""

    name: str = ""
    type: str = ""
    oid: int = 0
    width: int = 0
    precision: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SQLExternalColumn":
        oid = int(data.get("oid", 0) or 0)
        if not 0 <= oid < 2**32:
            raise ValueError(f"column oid out of range: {oid}")
        return cls(
            name=data.get("name", "") or "",
            type=data.get("type", "") or "",
            oid=oid,
            width=int(data.get("width", 0) or 0),
            precision=int(data.get("precision", 0) or 0),
        )


@dataclass(frozen=True)
class SQLExternalTable:
    """A table in an external database: where it lives and its columns."""

    catalog_name: str = ""
    schema_name: str = ""
    name: str = ""
    columns: tuple[SQLExternalColumn, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SQLExternalTable":
        return cls(
            catalog_name=data.get("catalogName", "") or "",
            schema_name=data.get("schemaName", "") or "",
            name=data.get("name", "") or "",
            columns=tuple(
                SQLExternalColumn.from_dict(c) for c in data.get("columns") or ()
            ),
        )


@dataclass(frozen=True)
class SQLExternalConnection:
    """A named external connection and the tables it exposes."""

    connection_name: str = ""
    tables: dict[str, SQLExternalTable] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SQLExternalConnection":
        return cls(
            connection_name=data.get("alias", "") or "",
            tables={
                key: SQLExternalTable.from_dict(table)
                for key, table in (data.get("tables") or {}).items()
            },
        )