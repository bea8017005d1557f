"""Nested map keyed by paths, flattened to its top level with optional stringification."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Sequence
from xml.sax.saxutils import escape

ENCODING_JSON = "application/json"
ENCODING_XML = "application/xml"


class BrickMapError(ValueError):
    """Raised when a key path cannot be stored."""


@dataclass
class BrickMapConfig:
    """Which top-level keys are rendered as strings, and in what encoding."""

    stringified_paths: set[str] = field(default_factory=set)
    encoding: str = ""

    @property
    def effective_encoding(self) -> str:
        return self.encoding or ENCODING_JSON


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(v) for v in value) + "]"
    if isinstance(value, dict):
        inner = " ".join(
            f"{k}:{_format_value(v)}" for k, v in sorted(value.items())
        )
        return f"map[{inner}]"
    return str(value)


def _to_xml(mapping: dict) -> str:
    parts = []
    for key in sorted(mapping):
        value = mapping[key]
        if isinstance(value, dict):
            body = _to_xml(value)
        else:
            body = escape(_format_value(value))
        parts.append(f"<{key}>{body}</{key}>")
    return "".join(parts)


class BrickMap:
    """A tree of dictionaries addressed by key paths."""

    def __init__(self, config: BrickMapConfig | None = None) -> None:
        self.config = config or BrickMapConfig()
        self._root: dict[str, Any] = {}

    def set(self, key_path: Sequence[str], value: Any) -> None:
        """Store ``value`` at ``key_path``, creating intermediate maps."""
        if not key_path:
            raise BrickMapError("brick map key path must have at least one element")
        if len(key_path) == 1:
            self._root[key_path[0]] = value
            return
        node = self._root
        last = len(key_path) - 1
        for i, key in enumerate(key_path):
            if key == "":
                raise BrickMapError(
                    f"brick map key path cannot have empty key at index {i}"
                )
            if i == last:
                node[key] = value
                return
            child = node.setdefault(key, {})
            if not isinstance(child, dict):
                raise BrickMapError(f"brick map key path is not a map at index {i}")
            node = child

    def _parent(self, key_path: Sequence[str]) -> dict | None:
        if not key_path or any(k == "" for k in key_path):
            return None
        node: Any = self._root
        for key in key_path[:-1]:
            node = node.get(key) if isinstance(node, dict) else None
            if not isinstance(node, dict):
                return None
        return node

    def get(self, key_path: Sequence[str]) -> Any:
        """Return the value at ``key_path``; raise KeyError if absent."""
        parent = self._parent(key_path)
        if parent is None or key_path[-1] not in parent:
            raise KeyError(tuple(key_path))
        return parent[key_path[-1]]

    def delete(self, key_path: Sequence[str]) -> bool:
        """Remove the value at ``key_path``; return whether anything was removed."""
        parent = self._parent(key_path)
        if parent is None or key_path[-1] not in parent:
            return False
        del parent[key_path[-1]]
        return True

    def to_flat_map(self) -> dict[str, Any]:
        """Return the top level, with stringified keys rendered as text."""
        encoding = self.config.effective_encoding
        output: dict[str, Any] = {}
        for key, value in self._root.items():
            if key not in self.config.stringified_paths:
                output[key] = value
                continue
            if isinstance(value, dict):
                try:
                    if encoding == ENCODING_XML:
                        output[key] = _to_xml(value)
                    else:
                        output[key] = json.dumps(
                            value,
                            sort_keys=True,
                            separators=(",", ":"),
                            ensure_ascii=False,
                        )
                except (TypeError, ValueError):
                    output[key] = _format_value(value)
            else:
                output[key] = _format_value(value)
        return output