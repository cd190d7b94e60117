import pytest

from oaspec.schema import AdditionalProperties, Schema, SchemaRef
from oaspec.template_funcs import (
    deref,
    http_status,
    keys_reflect,
    must_validate,
    must_validate_recurse,
    ref_name,
)


def test_http_status_known_codes():
    assert http_status(200) == "OK"
    assert http_status(404) == "Not Found"


def test_http_status_unknown_code_is_empty():
    assert http_status(999) == ""


def test_ref_name_takes_last_segment():
    assert ref_name("#/components/schemas/Pet") == "Pet"
    assert ref_name("Plain") == "Plain"


def test_deref_returns_same_object():
    value = {"a": 1}
    assert deref(value) is value
    assert deref(None) is None


def test_keys_reflect_returns_all_keys():
    mapping = {"b": 1, "a": 2, "c": 3}
    assert sorted(keys_reflect(mapping)) == sorted(mapping)


def test_keys_reflect_rejects_non_mapping():
    with pytest.raises(TypeError):
        keys_reflect(["a", "b"])


def test_keys_reflect_rejects_non_string_keys():
    with pytest.raises(TypeError):
        keys_reflect({1: "a"})


def test_must_validate_plain_schema_is_false():
    assert must_validate(Schema(type="string")) is False


@pytest.mark.parametrize(
    "schema",
    [
        Schema(type="string", max_length=5),
        Schema(type="string", min_length=0),
        Schema(type="string", pattern="^a"),
        Schema(type="integer", maximum=3.0),
        Schema(type="integer", multiple_of=2.0),
        Schema(type="array", unique_items=False),
        Schema(type="string", enum=["a"]),
        Schema(type="object", min_properties=1),
    ],
)
def test_must_validate_detects_constraints(schema):
    assert must_validate(schema) is True


def test_must_validate_empty_enum_is_false():
    assert must_validate(Schema(type="string", enum=[])) is False


def test_recurse_into_array_items():
    inner = Schema(type="string", min_length=1)
    outer = Schema(type="array", items=SchemaRef(schema=inner))
    assert must_validate_recurse(outer) is True
    plain = Schema(type="array", items=SchemaRef(schema=Schema(type="string")))
    assert must_validate_recurse(plain) is False


def test_recurse_into_properties():
    outer = Schema(
        type="object",
        properties={
            "a": SchemaRef(schema=Schema(type="string")),
            "b": SchemaRef(ref="#/components/schemas/B", schema=Schema(type="integer", minimum=0.0)),
        },
    )
    assert must_validate_recurse(outer) is True


def test_recurse_into_additional_properties():
    extra = AdditionalProperties(schema_ref=SchemaRef(schema=Schema(type="string", pattern="x")))
    outer = Schema(type="object", additional_properties=extra)
    assert must_validate_recurse(outer) is True
    boolean = Schema(type="object", additional_properties=AdditionalProperties(allowed=True))
    assert must_validate_recurse(boolean) is False


def test_recurse_terminates_on_cycle():
    node = Schema(type="object")
    node.properties = {"next": SchemaRef(ref="#/components/schemas/Node", schema=node)}
    assert must_validate_recurse(node) is False


def test_recurse_array_of_self_terminates():
    node = Schema(type="array")
    node.items = SchemaRef(ref="#/components/schemas/List", schema=node)
    assert must_validate_recurse(node) is False


def test_recurse_unresolved_ref_is_false():
    outer = Schema(type="array", items=SchemaRef(ref="#/components/schemas/Missing"))
    assert must_validate_recurse(outer) is False


def test_recurse_primitive_without_constraints_is_false():
    assert must_validate_recurse(Schema(type="boolean")) is False