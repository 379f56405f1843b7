from .documents import (
    dump_schema_text,
    dump_tree_text,
    load_schema_document,
    load_tree_file,
    load_tree_mapping,
    tree_to_mapping,
    validate_tree_document,
)
from .errors import SchemaBuilderError, SchemaDepthError, SchemaLoadError, TreeFileError
from .generator import DEFAULT_MAX_DEPTH, build_fragment, generate_schema
from .lossy import DroppedConstruct, find_dropped_constructs
from .parser import ParsedSchema, parse_properties, parse_schema

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DroppedConstruct",
    "ParsedSchema",
    "SchemaBuilderError",
    "SchemaDepthError",
    "SchemaLoadError",
    "TreeFileError",
    "build_fragment",
    "dump_schema_text",
    "dump_tree_text",
    "find_dropped_constructs",
    "generate_schema",
    "load_schema_document",
    "load_tree_file",
    "load_tree_mapping",
    "parse_properties",
    "parse_schema",
    "tree_to_mapping",
    "validate_tree_document",
]
