import pytest

from sdkmodel.schema import Schema, provider_type_condition_is_valid

PREFIX = "#/components/schemas/"

DOC = {
    "components": {
        "schemas": {
            "Tag": {"type": "object", "properties": {"label": {"type": "string"}}},
            "Pet": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "age": {"type": "integer"},
                    "tags": {"type": "array", "items": {"$ref": PREFIX + "Tag"}},
                },
            },
            "Node": {
                "type": "object",
                "properties": {
                    "children": {"type": "array", "items": {"$ref": PREFIX + "Node"}}
                },
            },
            "Base": {
                "type": "object",
                "properties": {"id": {"type": "string"}, "kind": {"type": "string"}},
            },
            "Extra": {
                "type": "object",
                "properties": {"id": {"type": "integer"}, "size": {"type": "integer"}},
            },
            "Composite": {
                "allOf": [{"$ref": PREFIX + "Base"}, {"$ref": PREFIX + "Extra"}]
            },
            "Mixed": {
                "type": "object",
                "properties": {"own": {"type": "string"}},
                "allOf": [{"$ref": PREFIX + "Base"}],
            },
        }
    }
}


class FakeService:
    def __init__(self, document=None, unioned=False):
        self.document = document if document is not None else DOC
        self._unioned = unioned

    def is_object_schema_implicitly_unioned(self):
        return self._unioned


def load(name, unioned=False):
    svc = FakeService(unioned=unioned)
    return Schema.from_dict({"$ref": PREFIX + name}, svc, name, PREFIX + name)


@pytest.mark.parametrize(
    "provider_type, rhs, expected",
    [
        ("string", "x", True),
        ("object", "x", True),
        ("array", 3, False),
        ("int", 5, True),
        ("int64", "5", False),
        ("int32", True, False),
        ("boolean", "x", False),
    ],
)
def test_provider_type_condition(provider_type, rhs, expected):
    assert provider_type_condition_is_valid(provider_type, "lhs", rhs) is expected


def test_references_are_resolved():
    pet = load("Pet")
    assert set(pet.properties()) == {"name", "age", "tags"}
    tags = pet.property("tags")
    assert tags.items().name() == "Tag"
    assert tags.selection_name() == "Tag"
    assert tags.is_array_ref()
    assert set(tags.items().properties()) == {"label"}


def test_recursive_reference_terminates():
    node = load("Node")
    child = node.property("children").items()
    grandchild = child.property("children").items()
    assert grandchild.name() == "Node"
    assert grandchild.raw_properties.keys() == node.raw_properties.keys()


def test_unresolvable_reference_raises():
    with pytest.raises(KeyError):
        Schema.from_dict({"$ref": PREFIX + "Missing"}, FakeService(), "", "")


def test_name_is_key_suffix():
    schema = Schema.from_dict({"type": "string"}, None, "a/b/leaf", "")
    assert schema.name() == "leaf"
    assert schema.selection_name() == "leaf"


def test_items_absent_raises():
    with pytest.raises(ValueError):
        load("Pet").items()


def test_property_schema():
    pet = load("Pet")
    age = pet.property_schema("age")
    assert age.name() == "age"
    assert age.is_integral()
    assert not age.is_boolean()
    with pytest.raises(KeyError):
        pet.property_schema("missing")
    assert pet.property("missing") is None


def test_required_and_type_predicates():
    pet = load("Pet")
    assert pet.is_required("name")
    assert not pet.is_required("age")
    assert Schema.from_dict({"type": "boolean"}).is_boolean()
    assert Schema.from_dict({"type": "float64"}).is_float()
    assert pet.condition_is_valid("id", "value")
    assert not pet.condition_is_valid("id", 7)


def test_type_inherited_from_all_of():
    composite = load("Composite")
    assert composite.schema_type == ""
    assert composite.type() == "object"
    assert composite.has_polymorphic_properties()


def test_fattened_schema_prefixes_clashing_properties():
    composite = load("Composite")
    fat = composite.fattened_polymorphic_schema()
    assert set(fat.raw_properties) == {"id", "kind", "Extra_id", "size"}
    assert fat.all_of == []
    assert set(composite.properties()) == set(fat.raw_properties)
    assert composite.property("size").is_integral()
    assert load("Pet").fattened_polymorphic_schema() is None


def test_implicit_union_includes_composed_properties():
    assert set(load("Mixed").properties()) == {"own"}
    assert set(load("Mixed", unioned=True).properties()) == {"own", "id", "kind"}


def test_xml_name_declared():
    schema = Schema.from_dict({"type": "object", "xml": {"name": "Item"}})
    assert schema.xml_alias() == "Item"
    assert schema.xml_name() == "Item"
    assert schema.is_xml_wrapped()


def test_xml_wrapped_without_name():
    schema = Schema.from_dict({"type": "array", "xml": {"wrapped": True}})
    assert schema.xml_name() is None
    assert schema.is_xml_wrapped()


def test_xml_alias_inherited_from_all_of():
    schema = Schema.from_dict({"allOf": [{"type": "object", "xml": {"name": "Inner"}}]})
    assert schema.xml_alias() == "Inner"
    assert schema.xml_name() == "Inner"


def test_xml_absent():
    schema = Schema.from_dict({"type": "object"})
    assert schema.xml_alias() == ""
    assert schema.xml_name() is None
    assert not schema.is_xml_wrapped()


def test_additional_properties():
    schema = Schema.from_dict(
        {"type": "object", "additionalProperties": {"type": "string"}}
    )
    extra = schema.additional_properties()
    assert extra.type() == "string"
    assert extra.key == "additionalProperties"
    assert Schema.from_dict({"additionalProperties": True}).additional_properties() is None


def test_bind_shares_definition_but_not_context():
    pet = load("Pet")
    other = pet.bind(None, "other", "elsewhere")
    assert other.raw_properties is pet.raw_properties
    assert other.name() == "other"
    assert pet.key == "Pet"