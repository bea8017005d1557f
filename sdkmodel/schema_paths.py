"""Navigation of schemas by property paths, XML element names and select keys."""

from __future__ import annotations

from typing import Sequence

from sdkmodel.schema import Schema, path_suffix


def descendent(schema: Schema, path: Sequence[str]) -> Schema | None:
    """Follow ``path`` down from ``schema``; '[*]' steps into items or additional properties."""
    if not path:
        return schema
    head, rest = path[0], path[1:]
    if head == "[*]":
        try:
            items = schema.items()
        except ValueError:
            items = None
        if items is not None:
            return descendent(items, rest)
        additional = schema.additional_properties()
        if additional is not None:
            return descendent(additional, rest)
    child = schema.property(head)
    if child is None:
        child = xml_child(schema, head, len(path) <= 1)
        if child is None:
            return None
    return descendent(child, rest)


def xml_child(schema: Schema, path: str, is_terminal: bool) -> Schema | None:
    """Return the child whose XML element name is ``path``, or None.

    When the match lies inside array items and ``is_terminal`` is set, the
    array itself is returned rather than the matched item child.
    """
    if schema.xml_alias() == path:
        return schema
    for prop in schema.properties().values():
        if prop.xml_alias() == path:
            return prop
    items_ref = schema.items_ref
    if (
        schema.schema_type == "array"
        and items_ref is not None
        and items_ref.value is not None
    ):
        items = items_ref.value.bind(schema.service, "", items_ref.ref)
        found = xml_child(items, path, is_terminal)
        if found is None:
            return None
        return schema if is_terminal else found
    for member_ref in schema.all_of:
        member = member_ref.value
        if member is None:
            continue
        member_items = member.items_ref
        if (
            member.schema_type == "array"
            and member_items is not None
            and member_items.value is not None
        ):
            items = member_items.value.bind(schema.service, "", member_items.ref)
            found = xml_child(items, path, is_terminal)
            if found is None:
                return None
            if not is_terminal:
                return found
            return member.bind(
                schema.service, path_suffix(member_items.ref), member_items.ref
            )
    return None


def _xml_terminal(schema: Schema) -> Schema | None:
    if not schema.has_polymorphic_properties():
        return schema
    fat = schema.fattened_polymorphic_schema()
    if fat is None:
        return None
    if fat.type() == "array" and not schema.is_items_xml_wrapped():
        try:
            return fat.items()
        except ValueError:
            return None
    return fat


def xml_descendent(schema: Schema, path: Sequence[str]) -> Schema | None:
    """Follow XML element ``path`` down from ``schema``; a lone '*' ends the walk."""
    if not path or (len(path) == 1 and path[0] == "*"):
        return _xml_terminal(schema)
    child = schema.property(path[0])
    if child is None:
        child = xml_child(schema, path[0], len(path) <= 1)
        if child is None:
            return None
    return xml_descendent(child, path[1:])


def find_by_path(
    schema: Schema, path: str, visited: set[str] | None = None
) -> Schema | None:
    """Search ``schema`` depth first for a property keyed ``path``.

    ``visited`` records references already entered so that recursive
    schemas terminate.
    """
    if visited is None:
        visited = set()
    if schema.key == path:
        return schema
    remaining = path[len(schema.key):] if path.startswith(schema.key) else path
    if schema.schema_type == "object" or (
        schema.has_properties_or_polymorphic_properties() and schema.is_not_simple()
    ):
        if schema.has_polymorphic_properties() and not schema.already_expanded:
            fat = schema.fattened_polymorphic_schema()
            if fat is not None:
                fat.already_expanded = True
                return find_by_path(fat, path, visited)
        for key, ref in schema.raw_properties.items():
            if ref.ref:
                if ref.ref in visited:
                    continue
                visited.add(ref.ref)
            if ref.value is None:
                continue
            child = ref.value.bind(schema.service, key, ref.ref)
            if key == path:
                return child
            found = find_by_path(child, path, visited)
            if found is not None:
                return found
            found = find_by_path(child, remaining, visited)
            if found is not None:
                return found
    if schema.schema_type == "array":
        try:
            return schema.items()
        except ValueError:
            return None
    return None


def select_items_schema(schema: Schema, key: str) -> tuple[Schema, str]:
    """Return the schema of the rows selected under ``key`` and the key used.

    Raises ValueError when no such rows can be found.
    """
    if key == "":
        items_ref = schema.items_ref
        if items_ref is not None and items_ref.value is not None:
            return items_ref.value.bind(schema.service, "", items_ref.ref), ""
        return schema, ""
    if schema.key.startswith("[]") or schema.schema_type == "array":
        return schema.items(), key
    if schema.raw_properties:
        prop = schema.raw_properties.get(key)
        if prop is None or prop.value is None:
            raise ValueError(f"could not find items for key = '{key}'")
        return prop.value.bind(schema.service, key, prop.ref).items(), key
    if schema.has_polymorphic_properties():
        fat = schema.fattened_polymorphic_schema()
        if fat is None:
            raise ValueError("polymorphic select response parse failed")
        return fat, ""
    raise ValueError(f"could not find items for key = '{key}'")


def select_list_items(schema: Schema, key: str) -> tuple[Schema | None, str]:
    """Return the directly declared property ``key`` and the key, or (None, '')."""
    prop = schema.raw_properties.get(key)
    if prop is None or prop.value is None:
        return None, ""
    return prop.value.bind(schema.service, "", prop.ref), key