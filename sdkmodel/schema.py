"""OpenAPI schema model with polymorphic (allOf/anyOf/oneOf) flattening and XML hints."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

ANONYMOUS_COLUMN_NAME = "column_anon"


def provider_type_condition_is_valid(provider_type: str, lhs: str, rhs: Any) -> bool:
    """Return whether ``rhs`` is an acceptable value for a field of ``provider_type``."""
    if provider_type in ("string", "object", "array"):
        return isinstance(rhs, str)
    if provider_type in ("int", "int32", "int64"):
        return isinstance(rhs, int) and not isinstance(rhs, bool)
    return False


def path_suffix(path: str) -> str:
    """Return the last '/'-separated segment of ``path``."""
    return path.split("/")[-1]


@dataclass(eq=False)
class SchemaRef:
    """A possibly referenced schema: the reference string and the resolved schema."""

    ref: str = ""
    value: "Schema | None" = None


@dataclass(eq=False, repr=False)
class Schema:
    """An OpenAPI schema together with the key and path it was reached by."""

    schema_type: str = ""
    title: str = ""
    description: str = ""
    format: str = ""
    raw_properties: dict[str, SchemaRef] = field(default_factory=dict)
    items_ref: SchemaRef | None = None
    all_of: list[SchemaRef] = field(default_factory=list)
    any_of: list[SchemaRef] = field(default_factory=list)
    one_of: list[SchemaRef] = field(default_factory=list)
    additional_properties_ref: SchemaRef | None = None
    required: list[str] = field(default_factory=list)
    read_only: bool = False
    xml: Any = None
    extensions: dict[str, Any] = field(default_factory=dict)
    service: Any = None
    key: str = ""
    path: str = ""
    already_expanded: bool = False
    default_col_name: str = ""

    def __repr__(self) -> str:
        return (
            f"Schema(key={self.key!r}, type={self.schema_type!r}, path={self.path!r})"
        )

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        service: Any = None,
        key: str = "",
        path: str = "",
    ) -> "Schema":
        """Build a schema from its document form.

        References of the form '#/...' are resolved against ``service.document``
        when the service carries one; recursive references are shared, not copied.
        """
        loader = _Loader(getattr(service, "document", None), service)
        return loader.top_level(data).bind(service, key, path)

    # -- binding and copying -------------------------------------------------

    def bind(self, service: Any, key: str, path: str) -> "Schema":
        """Return a view of the same definition reached by ``key`` and ``path``."""
        return dataclasses.replace(
            self,
            service=service,
            key=key,
            path=path,
            already_expanded=False,
            default_col_name="",
        )

    def _copy(self) -> "Schema":
        return dataclasses.replace(self, raw_properties=dict(self.raw_properties))

    def _bind_all(self, refs: Mapping[str, SchemaRef]) -> dict[str, "Schema"]:
        return {
            k: r.value.bind(self.service, k, r.ref)
            for k, r in refs.items()
            if r.value is not None
        }

    # -- naming --------------------------------------------------------------

    def name(self) -> str:
        return path_suffix(self.key)

    def selection_name(self) -> str:
        if self.items_ref is not None:
            return path_suffix(self.items_ref.ref)
        return self.name()

    def type(self) -> str:
        """Return the declared type, or the first one found among allOf members."""
        if self.schema_type:
            return self.schema_type
        for ref in self.all_of:
            if ref.value is not None and ref.value.schema_type:
                return ref.value.schema_type
        return ""

    def inherited_title(self) -> str:
        if self.title:
            return self.title
        for ref in self.all_of:
            if ref.value is not None and ref.value.title:
                return ref.value.title
        return ""

    def inherited_description(self) -> str:
        if self.description:
            return self.description
        for ref in self.all_of:
            if ref.value is not None and ref.value.description:
                return ref.value.description
        return ""

    def flat_description_map(self, extended: bool) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.inherited_title(),
            "type": self.type(),
        }
        if extended:
            result["description"] = self.inherited_description()
        return result

    # -- properties and items -----------------------------------------------

    def is_object_schema_implicitly_unioned(self) -> bool:
        if self.service is None:
            return False
        return bool(self.service.is_object_schema_implicitly_unioned())

    def properties(self) -> dict[str, "Schema"]:
        """Return the properties, including those inherited through composition."""
        result: dict[str, Schema] = {}
        polymorphic = self.has_polymorphic_properties()
        if polymorphic and (
            self.is_object_schema_implicitly_unioned() or not self.raw_properties
        ):
            fat = self.fattened_polymorphic_schema()
            if fat is not None:
                result.update(self._bind_all(fat.raw_properties))
        result.update(self._bind_all(self.raw_properties))
        return result

    def property(self, key: str) -> "Schema | None":
        """Return the named property, or None if there is none."""
        if self.has_polymorphic_properties():
            fat = self.fattened_polymorphic_schema()
            source = fat.raw_properties if fat is not None else {}
        else:
            source = self.raw_properties
        ref = source.get(key)
        if ref is None or ref.value is None:
            return None
        return ref.value.bind(self.service, path_suffix(ref.ref), ref.ref)

    def property_schema(self, key: str) -> "Schema":
        """Return the directly declared property ``key``; raise KeyError if absent."""
        ref = self.raw_properties.get(key)
        if ref is None or ref.value is None:
            raise KeyError(f"property schema not present for key '{key}'")
        return ref.value.bind(self.service, key, ref.ref)

    def items(self) -> "Schema":
        """Return the array item schema; raise ValueError if there is none."""
        target = self.fat_items_schema(self.all_of) if self.all_of else self
        ref = target.items_ref
        if ref is not None and ref.value is not None:
            return ref.value.bind(self.service, path_suffix(ref.ref), ref.ref)
        raise ValueError(f"no items present in schema with key = '{self.key}'")

    def additional_properties(self) -> "Schema | None":
        ref = self.additional_properties_ref
        if ref is None or ref.value is None:
            return None
        return ref.value.bind(self.service, "additionalProperties", ref.ref)

    def extension(self, key: str) -> Any:
        """Return the value of extension ``key``, or None."""
        return self.extensions.get(key)

    # -- predicates ----------------------------------------------------------

    def is_required(self, key: str) -> bool:
        return key in self.required

    def is_integral(self) -> bool:
        return self.schema_type in ("int", "integer")

    def is_boolean(self) -> bool:
        return self.schema_type in ("bool", "boolean")

    def is_float(self) -> bool:
        return self.schema_type in ("float", "float64")

    def is_array_ref(self) -> bool:
        return self.items_ref is not None and self.items_ref.value is not None

    def condition_is_valid(self, lhs: str, rhs: Any) -> bool:
        return provider_type_condition_is_valid(self.schema_type, lhs, rhs)

    def has_polymorphic_properties(self) -> bool:
        return bool(self.all_of or self.any_of or self.one_of)

    def has_properties_or_polymorphic_properties(self) -> bool:
        return bool(self.raw_properties) or self.has_polymorphic_properties()

    def is_not_simple(self) -> bool:
        return self.schema_type in ("object", "array", "")

    # -- composition ---------------------------------------------------------

    def fattened_polymorphic_schema(self) -> "Schema | None":
        """Merge allOf, else oneOf, else anyOf members into one schema."""
        for refs in (self.all_of, self.one_of, self.any_of):
            if refs:
                return self.fat_schema(refs)
        return None

    def fat_schema(self, refs: Iterable[SchemaRef]) -> "Schema":
        """Merge ``refs``; clashing property names get the member's name as prefix."""
        copied = self._copy()
        copied.all_of = []
        copied.any_of = []
        copied.one_of = []
        result = copied.bind(self.service, self.key, self.path)
        new_properties: dict[str, SchemaRef] = {}
        for ref in refs:
            if ref.value is None:
                continue
            sub = ref.value.bind(self.service, path_suffix(ref.ref), ref.ref)
            if sub.has_polymorphic_properties():
                sub = sub.fattened_polymorphic_schema()
            self._absorb(result, sub)
            for k, prop in sub.raw_properties.items():
                if k in new_properties:
                    new_properties[f"{path_suffix(ref.ref)}_{k}"] = prop
                else:
                    new_properties[k] = prop
            result.raw_properties = new_properties
        return result

    def fat_items_schema(self, refs: Iterable[SchemaRef]) -> "Schema":
        """Merge the xml, type and items of ``refs`` into a copy of this schema."""
        result = self._copy().bind(self.service, self.key, self.path)
        for ref in refs:
            if ref.value is None:
                continue
            sub = ref.value.bind(self.service, path_suffix(ref.ref), ref.ref)
            self._absorb(result, sub)
        return result

    def fat_schema_with_overwrites(self, refs: Iterable[SchemaRef]) -> "Schema":
        """Merge ``refs`` into a copy, keeping properties already present."""
        result = self._copy().bind(self.service, self.key, self.path)
        for ref in refs:
            if ref.value is None:
                continue
            sub = ref.value.bind(self.service, "", ref.ref)
            if sub.xml is not None:
                result.xml = sub.xml
            sub_type = sub.type()
            if sub_type:
                result.schema_type = sub_type
            for k, prop in sub.raw_properties.items():
                result.raw_properties.setdefault(k, prop)
        return result

    @staticmethod
    def _absorb(target: "Schema", sub: "Schema") -> None:
        if sub.xml is not None:
            target.xml = sub.xml
        sub_type = sub.type()
        if sub_type:
            target.schema_type = sub_type
        if sub.items_ref is not None:
            target.items_ref = sub.items_ref

    # -- XML -----------------------------------------------------------------

    def _xml_attribute(self, key: str) -> tuple[Any, bool]:
        if isinstance(self.xml, Mapping) and key in self.xml:
            return self.xml[key], True
        return None, False

    def _member_views(self) -> Iterable["Schema"]:
        for ref in self.all_of:
            if ref.value is not None:
                yield ref.value.bind(self.service, "", ref.ref)

    def xml_alias(self) -> str:
        """Return the XML element name declared here or by an allOf member, or ''."""
        name, present = self._xml_attribute("name")
        if present and isinstance(name, str):
            return name
        for member in self._member_views():
            alias = member.xml_alias()
            if alias:
                return alias
        return ""

    def xml_name(self) -> str | None:
        """Return the declared XML name, or None if none is declared."""
        name, present = self._xml_attribute("name")
        if present:
            return name if isinstance(name, str) else None
        for member in self._member_views():
            member_name = member.xml_name()
            if member_name is not None:
                return member_name
        return None

    def is_xml_wrapped(self) -> bool:
        if self.xml_name() is not None:
            return True
        wrapped, present = self._xml_attribute("wrapped")
        if not present:
            return False
        if any(member.is_xml_wrapped() for member in self._member_views()):
            return True
        return wrapped is True

    def is_items_xml_wrapped(self) -> bool:
        if self.items_ref is not None and self.items_ref.value is None:
            return False
        if self.all_of:
            return self.fat_items_schema(self.all_of).is_xml_wrapped()
        return False


class _Loader:
    """Builds schemas from document form, resolving local references once each."""

    def __init__(self, document: Any, service: Any) -> None:
        self._document = document
        self._service = service
        self._resolved: dict[str, Schema | None] = {}

    def top_level(self, data: Mapping[str, Any]) -> Schema:
        if "$ref" in data:
            ref = data["$ref"]
            schema = self.resolve(ref)
            if schema is None:
                raise KeyError(f"cannot resolve schema reference '{ref}'")
            return schema
        return self.build(data)

    def ref(self, data: Any) -> SchemaRef:
        if isinstance(data, Mapping) and "$ref" in data:
            ref = data["$ref"]
            return SchemaRef(ref, self.resolve(ref))
        if isinstance(data, Mapping):
            return SchemaRef("", self.build(data))
        return SchemaRef("", None)

    def resolve(self, ref: str) -> Schema | None:
        if ref in self._resolved:
            return self._resolved[ref]
        target = _resolve_pointer(self._document, ref)
        if target is None:
            self._resolved[ref] = None
            return None
        schema = Schema(service=self._service)
        self._resolved[ref] = schema
        self._fill(schema, target)
        return schema

    def build(self, data: Mapping[str, Any]) -> Schema:
        schema = Schema(service=self._service)
        self._fill(schema, data)
        return schema

    def _fill(self, schema: Schema, data: Mapping[str, Any]) -> None:
        if "$ref" in data:
            target = self.resolve(data["$ref"])
            if target is not None and target is not schema:
                for f in dataclasses.fields(Schema):
                    setattr(schema, f.name, getattr(target, f.name))
            return
        declared_type = data.get("type", "")
        if isinstance(declared_type, list):
            declared_type = next((t for t in declared_type if t != "null"), "")
        schema.schema_type = declared_type or ""
        schema.title = data.get("title", "") or ""
        schema.description = data.get("description", "") or ""
        schema.format = data.get("format", "") or ""
        schema.raw_properties = {
            k: self.ref(v) for k, v in (data.get("properties") or {}).items()
        }
        items = data.get("items")
        schema.items_ref = self.ref(items) if isinstance(items, Mapping) else None
        schema.all_of = [self.ref(v) for v in data.get("allOf") or []]
        schema.any_of = [self.ref(v) for v in data.get("anyOf") or []]
        schema.one_of = [self.ref(v) for v in data.get("oneOf") or []]
        additional = data.get("additionalProperties")
        schema.additional_properties_ref = (
            self.ref(additional) if isinstance(additional, Mapping) else None
        )
        schema.required = list(data.get("required") or [])
        schema.read_only = bool(data.get("readOnly", False))
        schema.xml = data.get("xml")
        schema.extensions = {k: v for k, v in data.items() if k.startswith("x-")}


def _resolve_pointer(document: Any, ref: str) -> Mapping[str, Any] | None:
    if document is None or not ref.startswith("#"):
        return None
    node: Any = document
    for part in ref[1:].split("/"):
        if part == "":
            continue
        part = part.replace("~1", "/").replace("~0", "~")
        if isinstance(node, Mapping) and part in node:
            node = node[part]
        elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
            node = node[int(part)]
        else:
            return None
    return node if isinstance(node, Mapping) else None