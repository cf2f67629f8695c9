from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .models import ApiConfig, FieldMapping
from .path import ARRAY_MARKER
from .types import DataType


def clean_internal_keys(obj: Any) -> Any:
    """Drop keys starting with ``_`` at every level (comments, internal variables)."""
    if isinstance(obj, list):
        return [clean_internal_keys(x) for x in obj]

    if isinstance(obj, dict):
        return {k: clean_internal_keys(v) for k, v in obj.items() if not str(k).startswith("_")}

    return obj


def infer_data_type(value: Any) -> DataType:
    if isinstance(value, list):
        if value and all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in value):
            return "array_number"
        if value and isinstance(value[0], dict):
            return "array_object"
        return "array_string"

    if isinstance(value, dict):
        return "object"

    if isinstance(value, bool):
        return "boolean"

    if isinstance(value, (int, float)):
        return "number"

    return "string"


def flatten_template(template: Dict[str, Any], prefix: str = "") -> List[Tuple[str, DataType]]:
    """
    List the leaf paths of a body template with their inferred types.

    >>> flatten_template({"a": {"b": 1}, "tags": ["x"]})
    [('a.b', 'number'), ('tags', 'array_string')]
    """
    out: List[Tuple[str, DataType]] = []
    for key, value in template.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict) and value:
            out.extend(flatten_template(value, path))
        else:
            out.append((path, infer_data_type(value)))

    return out


def seed_mappings(api_config: Union[ApiConfig, Dict[str, Any]]) -> List[FieldMapping]:
    if isinstance(api_config, dict):
        api_config = ApiConfig.model_validate(api_config)

    return [
        FieldMapping(id=f"map-{idx}", json_path=path, data_type=data_type, csv_header="", default_value="")
        for idx, (path, data_type) in enumerate(flatten_template(api_config.body_template or {}))
    ]


def _match_header(m: FieldMapping, headers: Sequence[str]) -> Optional[str]:
    clean = m.json_path.replace(ARRAY_MARKER, "").lower()
    last = clean.split(".")[-1]
    for h in headers:
        if h.lower() in (clean, last):
            return h

    return None


def auto_map_headers(mappings: Sequence[FieldMapping], headers: Sequence[str]) -> List[FieldMapping]:
    """Fill ``csv_header`` for unmapped fields whose path or last segment names a column."""
    if not headers:
        return list(mappings)

    out: List[FieldMapping] = []
    for m in mappings:
        match = None if m.csv_header else _match_header(m, headers)
        out.append(m.model_copy(update={"csv_header": match}) if match else m)

    return out
