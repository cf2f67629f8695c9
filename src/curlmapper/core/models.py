from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .exceptions import MappingError
from .types import DataType


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransformationConfig(_CamelModel):
    enabled: bool = False
    separator: str = ","
    item_separator: Optional[str] = None
    item_index: Optional[int] = None


class InternalField(_CamelModel):
    key: str
    index: int = 0
    data_type: DataType = "string"


class FieldMapping(_CamelModel):
    """One output field: where it goes, where its value comes from, how it is cast."""

    id: Optional[str] = None
    json_path: str
    data_type: DataType = "string"
    csv_header: Optional[str] = None
    default_value: Optional[str] = None
    transformation: Optional[TransformationConfig] = None
    internal_fields: List[InternalField] = Field(default_factory=list)

    @field_validator("internal_fields", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ApiConfig(_CamelModel):
    method: str = "GET"
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body_template: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("method")
    @classmethod
    def _upper(cls, v: str) -> str:
        return (v or "GET").strip().upper()

    @field_validator("headers", "body_template", mode="before")
    @classmethod
    def _none_as_dict(cls, v: Any) -> Any:
        return {} if v is None else v


def normalize_mappings(mappings: Any) -> List[FieldMapping]:
    if not isinstance(mappings, (list, tuple)):
        raise MappingError("Mappings must be a list of field mappings.")

    out: List[FieldMapping] = []
    for i, m in enumerate(mappings):
        if isinstance(m, FieldMapping):
            out.append(m)
            continue

        if not isinstance(m, dict):
            raise MappingError(f"Mapping #{i} must be an object (dict) or FieldMapping.")

        try:
            out.append(FieldMapping.model_validate(m))
        except ValidationError as e:
            raise MappingError(f"Mapping #{i} is invalid: {e}") from e

    return out
