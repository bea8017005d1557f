"""Server entries of a service document and the URLs they expand to."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping


@dataclass(frozen=True)
class ServerVariable:
    """A templated part of a server URL."""

    default: str = ""
    enum: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class Server:
    """A server URL template and its variables."""

    url: str = ""
    description: str = ""
    variables: dict[str, ServerVariable] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Server":
        variables = {
            name: ServerVariable(
                default=str(spec.get("default", "") or ""),
                enum=tuple(str(v) for v in spec.get("enum") or ()),
                description=spec.get("description", "") or "",
            )
            for name, spec in (data.get("variables") or {}).items()
        }
        return cls(
            url=data.get("url", "") or "",
            description=data.get("description", "") or "",
            variables=variables,
        )


def replace_simple_string_vars(template: str, variables: Mapping[str, str]) -> str:
    """Replace each '{name}' in ``template`` by its value, in a single pass."""
    replacements = {
        "{" + k + "}": v for k, v in variables.items() if "{" + k + "}" in template
    }
    if not replacements:
        return template
    pattern = re.compile("|".join(re.escape(p) for p in replacements))
    return pattern.sub(lambda m: replacements[m.group(0)], template)


def generate_server_url(
    server: Server, variables: Mapping[str, str] | None = None
) -> str:
    """Expand ``server``'s URL with ``variables``, falling back to defaults.

    Raises ValueError when a variable is neither supplied nor defaulted.
    """
    variables = variables or {}
    merged: dict[str, str] = {}
    for name, spec in server.variables.items():
        if name in variables:
            merged[name] = variables[name]
        elif spec.default == "":
            raise ValueError(f"no default provided for server variable {name}")
        else:
            merged[name] = spec.default
    return replace_simple_string_vars(server.url, merged)


def obtain_server_urls(
    servers: Iterable[Server], variables: Mapping[str, str] | None = None
) -> list[str]:
    """Return the URLs of every server that can be expanded.

    Raises ValueError when none can.
    """
    urls = []
    for server in servers:
        try:
            urls.append(generate_server_url(server, variables))
        except ValueError:
            continue
    if not urls:
        raise ValueError("cannot find any viable servers")
    return urls