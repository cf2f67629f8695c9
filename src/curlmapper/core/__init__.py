from .exceptions import MappingError
from .engine import PayloadBuilder, EngineConfig, construct_payload
from .models import ApiConfig, FieldMapping, InternalField, TransformationConfig
from .path import PathSegment, PathSyntaxError, parse_path, set_deep, get_deep
from .utils import cast_value, split_list, strip_wrapping
from .validation import validate_mappings
from .schema import clean_internal_keys, flatten_template, seed_mappings, auto_map_headers
from .io import Table, parse_delimited_text, read_table
from .builder.mapping import MappingBuilder

__all__ = [
    "MappingError",
    "PayloadBuilder",
    "EngineConfig",
    "construct_payload",
    "ApiConfig",
    "FieldMapping",
    "InternalField",
    "TransformationConfig",
    "PathSegment",
    "PathSyntaxError",
    "parse_path",
    "set_deep",
    "get_deep",
    "cast_value",
    "split_list",
    "strip_wrapping",
    "validate_mappings",
    "clean_internal_keys",
    "flatten_template",
    "seed_mappings",
    "auto_map_headers",
    "Table",
    "parse_delimited_text",
    "read_table",
    "MappingBuilder",
]
