from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Union

from ..engine import EngineConfig, PayloadBuilder
from ..exceptions import MappingError
from ..models import FieldMapping, InternalField, TransformationConfig, normalize_mappings
from ..types import DATA_TYPES, DataType


def _check_type(data_type: str) -> None:
    if data_type not in DATA_TYPES:
        raise ValueError(f"data type must be one of {DATA_TYPES}.")


class FieldBuilder:
    __slots__ = ("_parent", "_spec")

    def __init__(self, parent: "MappingBuilder", json_path: str) -> None:
        self._parent = parent
        self._spec: Dict[str, Any] = {"json_path": json_path, "data_type": "string"}

    def column(self, header: str) -> "FieldBuilder":
        if not header or not isinstance(header, str):
            raise ValueError("column() requires a non-empty string.")
        self._spec["csv_header"] = header
        return self

    def default(self, value: Any) -> "FieldBuilder":
        self._spec["default_value"] = "" if value is None else str(value)
        return self

    def as_type(self, data_type: DataType) -> "FieldBuilder":
        _check_type(data_type)
        self._spec["data_type"] = data_type
        return self

    def split(self, separator: str = ",", *, item_separator: Optional[str] = None, item_index: Optional[int] = None) -> "FieldBuilder":
        self._spec["transformation"] = TransformationConfig(
            enabled=True, separator=separator, item_separator=item_separator, item_index=item_index
        )
        return self

    def items(self, separator: str = ",", item_separator: str = "*") -> "FieldBuilder":
        """Structured array-of-object input such as ``(HAN*SGN), (HAN*AAA)``."""
        self._spec["data_type"] = "array_object"
        self._spec["transformation"] = TransformationConfig(
            enabled=True, separator=separator, item_separator=item_separator
        )
        return self

    def internal(self, key: str, index: int, data_type: DataType = "string") -> "FieldBuilder":
        _check_type(data_type)
        self._spec.setdefault("internal_fields", []).append(InternalField(key=key, index=index, data_type=data_type))
        return self

    def build(self) -> FieldMapping:
        return FieldMapping(**self._spec)

    def end(self) -> "MappingBuilder":
        self._parent._fields.append(self.build())
        return self._parent

    done = end


class MappingBuilder:
    """
    Fluent construction of a mapping list.

    Example:
        >>> mappings = (
        ...     MappingBuilder()
        ...     .field("customer.name").column("Name").end()
        ...     .field("tags").column("Tags").as_type("array_string").split("|").end()
        ...     .field("legs").column("Route").items()
        ...         .internal("from", 0).internal("to", 1).end()
        ...     .build()
        ... )
    """
    __slots__ = ("_fields",)

    def __init__(self) -> None:
        self._fields: List[FieldMapping] = []

    def field(self, json_path: str) -> FieldBuilder:
        if not json_path or not isinstance(json_path, str):
            raise ValueError("field(json_path=...) requires a non-empty string.")
        return FieldBuilder(self, json_path)

    def set(self, mapping: Union[FieldMapping, Dict[str, Any]]) -> "MappingBuilder":
        self._fields.extend(normalize_mappings([mapping]))
        return self

    def column(self, json_path: str, header: str, *, data_type: DataType = "string") -> "MappingBuilder":
        return self.field(json_path).column(header).as_type(data_type).end()

    def const(self, json_path: str, value: Any, *, data_type: DataType = "string") -> "MappingBuilder":
        return self.field(json_path).default(value).as_type(data_type).end()

    def build(self) -> List[FieldMapping]:
        if not self._fields:
            raise MappingError("Cannot build mappings: no fields defined.")
        return [m.model_copy(deep=True) for m in self._fields]

    def to_payload_builder(self, config: Optional[EngineConfig] = None) -> PayloadBuilder:
        return PayloadBuilder(self.build(), config=config)

    def from_list(self, mappings: Sequence[Union[FieldMapping, Dict[str, Any]]]) -> "MappingBuilder":
        self._fields = normalize_mappings(list(mappings))
        return self
