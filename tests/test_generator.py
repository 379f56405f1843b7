from __future__ import annotations

import json

import pytest

from schemabuilder.model import Property, SchemaMetadata
from schemabuilder.schema import SchemaDepthError, build_fragment, generate_schema


def test_generate_schema_concrete_scenario() -> None:
    properties = [
        Property(id="1", key="age", type="integer", required=True, minimum=0, maximum=120),
    ]
    metadata = SchemaMetadata(title="T", description="", version="")

    schema = generate_schema(properties, metadata, True)

    assert schema == {
        "type": "object",
        "title": "T",
        "properties": {"age": {"type": "integer", "minimum": 0, "maximum": 120}},
        "required": ["age"],
    }
    assert list(schema) == ["type", "title", "properties", "required"]


def test_empty_tree_is_bare_object() -> None:
    assert generate_schema([]) == {"type": "object"}


def test_metadata_is_gated_by_flag() -> None:
    metadata = SchemaMetadata(title="T", description="D", version="1.2.3")

    assert generate_schema([], metadata, True) == {
        "type": "object",
        "title": "T",
        "description": "D",
        "version": "1.2.3",
    }
    assert generate_schema([], metadata, False) == {"type": "object"}
    assert generate_schema([], None, True) == {"type": "object"}


def test_empty_key_is_left_out_of_properties_and_required() -> None:
    properties = [
        Property(id="1", key="", required=True),
        Property(id="2", key="a"),
    ]

    schema = generate_schema(properties)

    assert list(schema["properties"]) == ["a"]
    assert "required" not in schema


def test_required_propagation_at_root() -> None:
    properties = [
        Property(id="1", key="a", required=True),
        Property(id="2", key="b", required=False),
    ]

    assert generate_schema(properties)["required"] == ["a"]


def test_duplicate_keys_last_write_wins() -> None:
    properties = [
        Property(id="1", key="dup", type="string"),
        Property(id="2", key="other"),
        Property(id="3", key="dup", type="boolean"),
    ]

    schema = generate_schema(properties)

    assert schema["properties"]["dup"] == {"type": "boolean"}
    assert list(schema["properties"]) == ["dup", "other"]


def test_file_type_is_encoded_as_string_with_filename_format() -> None:
    fragment = build_fragment(Property(id="1", key="doc", type="file", title="Doc"))

    assert fragment == {"type": "string", "title": "Doc", "format": "filename"}


def test_string_constraints() -> None:
    fragment = build_fragment(
        Property(
            id="1",
            key="code",
            min_length=0,
            max_length=8,
            pattern="^[A-Z]+$",
            enum=["AB", "CD"],
        )
    )

    assert fragment == {
        "type": "string",
        "minLength": 0,
        "maxLength": 8,
        "pattern": "^[A-Z]+$",
        "enum": ["AB", "CD"],
    }


def test_empty_enum_and_pattern_are_omitted() -> None:
    fragment = build_fragment(Property(id="1", key="s", enum=[], pattern=""))
    assert fragment == {"type": "string"}


def test_constraints_are_gated_by_type() -> None:
    fragment = build_fragment(
        Property(
            id="1",
            key="n",
            type="number",
            min_length=3,
            pattern="x",
            minimum=0,
            min_items=1,
            unique_items=True,
        )
    )

    assert fragment == {"type": "number", "minimum": 0}


def test_array_constraints_and_unique_items_only_when_true() -> None:
    fragment = build_fragment(
        Property(id="1", key="a", type="array", min_items=0, max_items=3, unique_items=False)
    )
    assert fragment == {"type": "array", "minItems": 0, "maxItems": 3}

    fragment = build_fragment(Property(id="1", key="a", type="array", unique_items=True))
    assert fragment == {"type": "array", "uniqueItems": True}


def test_array_items_minimal_fragment() -> None:
    prop = Property(id="1", key="tags", type="array", items=Property(id="2", type="integer"))

    fragment = build_fragment(prop)

    assert fragment["items"] == {"type": "integer"}


def test_array_items_recursive_fragment_ignores_item_key() -> None:
    prop = Property(
        id="1",
        key="rows",
        type="array",
        items=Property(
            id="2",
            key="",
            type="object",
            children=[Property(id="3", key="x", type="number", required=True)],
        ),
    )

    assert build_fragment(prop)["items"] == {
        "type": "object",
        "properties": {"x": {"type": "number"}},
        "required": ["x"],
    }


def test_nested_object_required() -> None:
    prop = Property(
        id="1",
        key="point",
        type="object",
        children=[
            Property(id="2", key="x", required=True),
            Property(id="3", key="y"),
        ],
    )

    fragment = build_fragment(prop)

    assert fragment["properties"]["x"] == {"type": "string"}
    assert fragment["required"] == ["x"]


def test_object_without_children_has_no_properties() -> None:
    assert build_fragment(Property(id="1", key="o", type="object")) == {"type": "object"}


def test_stale_items_and_children_are_ignored() -> None:
    prop = Property(
        id="1",
        key="s",
        type="string",
        children=[Property(id="2", key="c")],
        items=Property(id="3", type="string"),
    )

    assert build_fragment(prop) == {"type": "string"}


def test_unknown_type_passes_through() -> None:
    assert build_fragment(Property(id="1", key="w", type="weird")) == {"type": "weird"}


def test_generation_is_deterministic_for_equal_trees() -> None:
    def make() -> list[Property]:
        return [
            Property(id="1", key="b", type="array", items=Property(id="2", type="file")),
            Property(id="3", key="a", type="object", children=[Property(id="4", key="z", required=True)]),
        ]

    metadata = SchemaMetadata(title="T", version="1")
    first = generate_schema(make(), metadata)
    second = generate_schema(make(), metadata.model_copy())

    assert json.dumps(first) == json.dumps(second)


def test_generate_does_not_mutate_input() -> None:
    properties = [Property(id="1", key="x", type="object", children=[Property(id="2", key="y")])]
    snapshot = [prop.model_dump() for prop in properties]

    generate_schema(properties)

    assert [prop.model_dump() for prop in properties] == snapshot


def test_depth_guard_raises() -> None:
    node = Property(id="leaf", key="leaf")
    for index in range(5):
        node = Property(id=f"n{index}", key=f"n{index}", type="object", children=[node])

    assert "properties" in generate_schema([node], max_depth=6)
    with pytest.raises(SchemaDepthError, match="maximum depth of 5"):
        generate_schema([node], max_depth=5)
