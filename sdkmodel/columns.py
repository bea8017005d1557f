"""Column descriptors for tabulated schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sdkmodel.schema import Schema


@dataclass(frozen=True)
class ColumnDescriptor:
    """A column: its name, optional alias and qualifier, and the schema behind it."""

    alias: str = ""
    name: str = ""
    qualifier: str = ""
    decorated_col: str = ""
    node: Any = None
    schema: Schema | None = None
    val: Any = None

    def identifier(self) -> str:
        """Return the alias if one is set, else the name."""
        return self.alias or self.name