"""SQL view definitions selected by dialect predicates, with fallbacks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

_SQL_DIALECT_RE = re.compile(r'sqlDialect(?:\s)*==(?:\s)*"(?P<sqlDialect>[^<>"\s]*)"')
_REQUIRED_PARAMS_RE = re.compile(
    r"requiredParams(?:\s)*==(?:\s)*\[(?P<requiredParams>[^\]]*)\]"
)


@dataclass
class ViewContainer:
    """A view's DDL, the predicate choosing it, and an optional fallback."""

    predicate: str = ""
    ddl: str = ""
    fallback: "ViewContainer | None" = None
    resource: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "ViewContainer":
        data = data or {}
        fallback = data.get("fallback")
        return cls(
            predicate=data.get("predicate", "") or "",
            ddl=data.get("ddl", "") or "",
            fallback=cls.from_dict(fallback) if fallback is not None else None,
        )

    @classmethod
    def load_yaml(cls, text: str) -> "ViewContainer":
        return cls.from_dict(yaml.safe_load(text))

    def sql_dialect_name(self) -> str:
        """Return the dialect named by the predicate, or '' if none is named."""
        match = _SQL_DIALECT_RE.search(self.predicate)
        return match.group("sqlDialect") if match else ""

    def required_param_names(self) -> list[str]:
        """Return the parameter names listed in the predicate."""
        match = _REQUIRED_PARAMS_RE.search(self.predicate)
        if not match:
            return []
        return [
            part.strip().replace('"', "")
            for part in match.group("requiredParams").split(",")
            if part != ""
        ]

    def set_resource(self, resource: Any) -> None:
        self.resource = resource
        if self.fallback is not None:
            self.fallback.set_resource(resource)

    def name_naive(self) -> str:
        """Return the owning resource's id, or '' when there is none."""
        if self.resource is not None:
            return self.resource.id
        return ""

    def views_for_sql_dialect(self, sql_dialect: str) -> list["ViewContainer"]:
        """Return this view and its fallbacks that apply to ``sql_dialect``."""
        accepted = self.sql_dialect_name()
        views: list[ViewContainer] = []
        if accepted == "":
            views.append(self)
        if accepted == sql_dialect:
            views.append(self)
        if self.fallback is not None:
            views.extend(self.fallback.views_for_sql_dialect(sql_dialect))
        return views

    def json_lookup(self, token: str) -> Any:
        if token == "ddl":
            return self.ddl
        if token == "predicate":
            return self.predicate
        if token == "fallback":
            return self.fallback
        raise KeyError(f"could not resolve token '{token}' from View doc object")