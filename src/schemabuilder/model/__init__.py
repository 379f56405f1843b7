from .ids import IdAllocator, SequentialIdAllocator, default_allocator
from .keys import DEFAULT_TYPE_LABELS, derive_key, to_snake_case, type_label
from .property import FILE_FORMAT, FILE_TYPE, PROPERTY_TYPES, Property, SchemaMetadata
from .tree import create, delete, find, upsert, walk

__all__ = [
    "DEFAULT_TYPE_LABELS",
    "FILE_FORMAT",
    "FILE_TYPE",
    "PROPERTY_TYPES",
    "IdAllocator",
    "Property",
    "SchemaMetadata",
    "SequentialIdAllocator",
    "create",
    "default_allocator",
    "delete",
    "derive_key",
    "find",
    "to_snake_case",
    "type_label",
    "upsert",
    "walk",
]
