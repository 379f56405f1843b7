from __future__ import annotations

from typing import Any

from schemabuilder.model import tree
from schemabuilder.model.ids import IdAllocator, default_allocator
from schemabuilder.model.property import Property, SchemaMetadata
from schemabuilder.schema.generator import DEFAULT_MAX_DEPTH, generate_schema
from schemabuilder.schema.parser import parse_schema

_METADATA_FIELDS = ("title", "description", "version")


class SchemaBuilder:
    """Holds the editable property tree and metadata for one editing session.

    Every mutation swaps in a new tree value; ``schema`` is recomputed from the
    current state on access.
    """

    def __init__(
        self,
        *,
        include_metadata: bool = True,
        allocator: IdAllocator | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.include_metadata = include_metadata
        self.allocator = allocator or default_allocator()
        self.max_depth = max_depth
        self.properties: list[Property] = []
        self.metadata = SchemaMetadata()

    @property
    def schema(self) -> dict[str, Any]:
        return generate_schema(
            self.properties,
            self.metadata,
            self.include_metadata,
            max_depth=self.max_depth,
        )

    def add_property(self) -> Property:
        """Return a new draft property; it joins the tree on its first update."""
        return tree.create(self.allocator)

    def update_property(self, node_id: str, node: Property) -> None:
        self.properties = tree.upsert(self.properties, node_id, node)

    def delete_property(self, node_id: str) -> None:
        self.properties = tree.delete(self.properties, node_id)

    def clear_all(self) -> None:
        self.properties = []
        self.metadata = SchemaMetadata()

    def update_metadata(self, field: str, value: str) -> None:
        if field not in _METADATA_FIELDS:
            raise ValueError(f"Unknown metadata field: {field}")
        self.metadata = self.metadata.model_copy(update={field: value})

    def load_schema(self, document: Any) -> None:
        parsed = parse_schema(document, allocator=self.allocator, max_depth=self.max_depth)
        self.properties = parsed.properties
        if parsed.metadata is not None and self.include_metadata:
            self.metadata = parsed.metadata
