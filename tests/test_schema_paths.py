import pytest

from sdkmodel.schema import Schema
from sdkmodel.schema_paths import (
    descendent,
    find_by_path,
    select_items_schema,
    select_list_items,
    xml_child,
    xml_descendent,
)


class _Svc:
    def __init__(self, document=None):
        self.document = document

    def is_object_schema_implicitly_unioned(self):
        return False


NESTED = {
    "type": "object",
    "properties": {
        "a": {"type": "object", "properties": {"b": {"type": "string"}}},
        "values": {"type": "array", "items": {"type": "integer"}},
    },
}


def test_descendent_empty_path_is_self():
    s = Schema.from_dict(NESTED)
    assert descendent(s, []) is s


def test_descendent_through_properties():
    s = Schema.from_dict(NESTED)
    assert descendent(s, ["a", "b"]).type() == "string"


def test_descendent_missing_is_none():
    s = Schema.from_dict(NESTED)
    assert descendent(s, ["a", "nope"]) is None


def test_descendent_star_into_items():
    s = Schema.from_dict(
        {
            "type": "array",
            "items": {"type": "object", "properties": {"id": {"type": "integer"}}},
        }
    )
    assert descendent(s, ["[*]", "id"]).is_integral()


def test_descendent_star_into_additional_properties():
    s = Schema.from_dict(
        {"type": "object", "additionalProperties": {"type": "boolean"}}
    )
    assert descendent(s, ["[*]"]).is_boolean()


def test_xml_child_by_alias():
    s = Schema.from_dict(
        {
            "type": "object",
            "properties": {"item": {"type": "string", "xml": {"name": "Item"}}},
        }
    )
    child = xml_child(s, "Item", True)
    assert child.type() == "string"
    assert xml_child(s, "Other", True) is None


def test_xml_child_self_alias():
    s = Schema.from_dict({"type": "object", "xml": {"name": "Root"}})
    assert xml_child(s, "Root", False) is s


def test_xml_child_inside_array_items():
    arr = Schema.from_dict(
        {
            "type": "array",
            "xml": {"name": "List"},
            "items": {
                "type": "object",
                "properties": {"x": {"type": "integer", "xml": {"name": "X"}}},
            },
        }
    )
    assert xml_child(arr, "X", True) is arr
    assert xml_child(arr, "X", False).is_integral()


def test_xml_descendent_star_returns_self():
    s = Schema.from_dict(NESTED)
    assert xml_descendent(s, ["*"]) is s


def test_xml_descendent_via_property():
    s = Schema.from_dict(NESTED)
    assert xml_descendent(s, ["a", "b"]).type() == "string"
    assert xml_descendent(s, ["missing"]) is None


def test_find_by_path_own_key():
    s = Schema.from_dict(NESTED, key="root")
    assert find_by_path(s, "root") is s


def test_find_by_path_nested():
    s = Schema.from_dict(NESTED)
    found = find_by_path(s, "b")
    assert found.type() == "string"
    assert found.key == "b"


def test_find_by_path_array_gives_items():
    s = Schema.from_dict({"type": "array", "items": {"type": "string"}})
    assert find_by_path(s, "anything").type() == "string"


def test_find_by_path_polymorphic():
    s = Schema.from_dict(
        {"allOf": [{"type": "object", "properties": {"p": {"type": "boolean"}}}]}
    )
    assert find_by_path(s, "p").is_boolean()


def test_find_by_path_recursive_reference_terminates():
    document = {
        "components": {
            "schemas": {
                "Node": {
                    "type": "object",
                    "properties": {
                        "child": {"$ref": "#/components/schemas/Node"},
                        "label": {"type": "string"},
                    },
                }
            }
        }
    }
    node = Schema.from_dict({"$ref": "#/components/schemas/Node"}, _Svc(document))
    assert find_by_path(node, "missing") is None
    assert find_by_path(node, "label").type() == "string"


def test_select_items_schema_empty_key():
    arr = Schema.from_dict({"type": "array", "items": {"type": "string"}})
    items, key = select_items_schema(arr, "")
    assert items.type() == "string"
    assert key == ""
    obj = Schema.from_dict(NESTED)
    same, key = select_items_schema(obj, "")
    assert same is obj
    assert key == ""


def test_select_items_schema_by_property():
    s = Schema.from_dict(NESTED)
    items, key = select_items_schema(s, "values")
    assert items.is_integral()
    assert key == "values"


def test_select_items_schema_missing_raises():
    s = Schema.from_dict(NESTED)
    with pytest.raises(ValueError):
        select_items_schema(s, "absent")


def test_select_items_schema_array_key():
    arr = Schema.from_dict({"type": "array", "items": {"type": "boolean"}})
    items, key = select_items_schema(arr, "rows")
    assert items.is_boolean()
    assert key == "rows"


def test_select_list_items():
    s = Schema.from_dict(NESTED)
    prop, key = select_list_items(s, "values")
    assert prop.type() == "array"
    assert key == "values"
    assert select_list_items(s, "absent") == (None, "")