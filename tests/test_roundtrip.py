from __future__ import annotations

from typing import Any

from schemabuilder.model import Property, SchemaMetadata, SequentialIdAllocator
from schemabuilder.schema import build_fragment, generate_schema, parse_schema


def _strip_ids(properties: list[Property]) -> list[dict[str, Any]]:
    def strip(node: dict[str, Any]) -> dict[str, Any]:
        node = {key: value for key, value in node.items() if key != "id"}
        node["children"] = [strip(child) for child in node["children"]]
        if node["items"] is not None:
            node["items"] = strip(node["items"])
        return node

    return [strip(prop.model_dump()) for prop in properties]


def _supported_tree() -> list[Property]:
    return [
        Property(
            id="1",
            key="name",
            title="Name",
            description="Full name",
            required=True,
            min_length=1,
            max_length=80,
            pattern="^[A-Za-z ]+$",
        ),
        Property(id="2", key="status", enum=["active", "inactive"]),
        Property(id="3", key="score", type="number", minimum=0, maximum=9.5),
        Property(id="4", key="count", type="integer", minimum=0),
        Property(id="5", key="verified", type="boolean"),
        Property(id="6", key="nothing", type="null"),
        Property(id="7", key="avatar", type="file", required=True),
        Property(
            id="8",
            key="tags",
            type="array",
            min_items=1,
            max_items=10,
            unique_items=True,
            items=Property(id="9", key="item", type="string", max_length=20),
        ),
        Property(
            id="10",
            key="address",
            type="object",
            children=[
                Property(id="11", key="city", required=True),
                Property(
                    id="12",
                    key="geo",
                    type="object",
                    children=[
                        Property(id="13", key="lat", type="number", required=True),
                        Property(id="14", key="lng", type="number", required=True),
                    ],
                ),
            ],
        ),
        Property(
            id="15",
            key="matrix",
            type="array",
            items=Property(
                id="16",
                key="item",
                type="array",
                items=Property(id="17", key="item", type="integer"),
            ),
        ),
    ]


def test_round_trip_preserves_supported_tree() -> None:
    tree = _supported_tree()
    metadata = SchemaMetadata(title="Person", description="A person", version="2.0.0")

    parsed = parse_schema(generate_schema(tree, metadata, True), allocator=SequentialIdAllocator())

    assert _strip_ids(parsed.properties) == _strip_ids(tree)
    assert parsed.metadata == metadata


def test_round_trip_of_generated_document_is_stable() -> None:
    metadata = SchemaMetadata(title="Person", description="", version="1.0.0")
    document = generate_schema(_supported_tree(), metadata, True)

    parsed = parse_schema(document)
    again = generate_schema(parsed.properties, parsed.metadata, True)

    assert again == document


def test_file_type_round_trip() -> None:
    fragment = build_fragment(Property(id="1", key="f", type="file"))
    assert fragment == {"type": "string", "format": "filename"}

    parsed = parse_schema({"type": "object", "properties": {"f": fragment}})
    assert parsed.properties[0].type == "file"


def test_round_trip_assigns_new_ids() -> None:
    tree = _supported_tree()
    parsed = parse_schema(generate_schema(tree), allocator=SequentialIdAllocator(prefix="fresh"))

    assert all(prop.id.startswith("fresh-") for prop in parsed.properties)
