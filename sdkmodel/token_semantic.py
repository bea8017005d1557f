"""Where a pagination token is found and how it is handled."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class TokenSemantic:
    """Location, key and processing algorithm of a pagination token."""

    algorithm: str = ""
    args: dict[str, Any] = field(default_factory=dict)
    key: str = ""
    location: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TokenSemantic":
        return cls(
            algorithm=data.get("algorithm", "") or "",
            args=dict(data.get("args") or {}),
            key=data.get("key", "") or "",
            location=data.get("location", "") or "",
        )

    def regex(self) -> str | None:
        """Return the 'regex' argument if it is a string, else None."""
        value = self.args.get("regex")
        return value if isinstance(value, str) else None

    def json_lookup(self, token: str) -> Any:
        if token == "algorithm":
            return self.algorithm
        raise KeyError(
            f"could not resolve token '{token}' from TokenSemantic doc object"
        )