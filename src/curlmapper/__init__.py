from .core import (
    ApiConfig,
    EngineConfig,
    FieldMapping,
    MappingBuilder,
    MappingError,
    PayloadBuilder,
    construct_payload,
    seed_mappings,
    validate_mappings,
)

__version__ = "0.1.0"

__all__ = [
    "ApiConfig",
    "EngineConfig",
    "FieldMapping",
    "MappingBuilder",
    "MappingError",
    "PayloadBuilder",
    "construct_payload",
    "seed_mappings",
    "validate_mappings",
]
