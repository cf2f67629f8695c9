from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import logging

import pandas as pd

from .models import FieldMapping, normalize_mappings
from .path import set_deep
from .utils import cast_value, pick_token, split_list, strip_wrapping
from .validation import validate_mappings


DEFAULT_SEPARATOR = ","
DEFAULT_ITEM_SEPARATOR = "*"

MappingLike = Union[FieldMapping, Dict[str, Any]]


@dataclass
class EngineConfig:
    trace_enabled: bool = False
    strict_schema: bool = False

    logger: Optional[logging.Logger] = None
    metrics_increment: Optional[Callable[[str, int], None]] = None


class PayloadBuilder:
    """
    Builds one JSON request body per data row from a list of field mappings.

    Mappings are applied in declaration order onto a fresh object; when two
    mappings write the same location the later one wins. Bad cells never
    raise: missing values skip the field and unparseable values fall back
    to the zero value of their type.
    """
    def __init__(self, mappings: Sequence[MappingLike], *, config: Optional[EngineConfig] = None) -> None:
        self._mappings: List[FieldMapping] = normalize_mappings(mappings)
        self._config: EngineConfig = config or EngineConfig()
        self._trace_enabled = bool(self._config.trace_enabled)

        if self._config.strict_schema:
            validate_mappings(self._mappings, raise_on_error=True)

    @property
    def mappings(self) -> List[FieldMapping]:
        return list(self._mappings)

    def build(self, row: Mapping[str, str]) -> Dict[str, Any]:
        payload, traces = self._build(row)
        if self._trace_enabled and self._config.logger:
            self._config.logger.debug("Payload trace: %s", traces)

        return payload

    def build_batch(self, rows: Iterable[Mapping[str, str]]) -> List[Dict[str, Any]]:
        return [self.build(row) for row in rows]

    def trace(self, row: Mapping[str, str]) -> Dict[str, Any]:
        payload, traces = self._build(row)
        return {"payload": payload, "fields": traces}

    def preview(self, rows: Iterable[Mapping[str, str]]) -> pd.DataFrame:
        payloads = self.build_batch(rows)
        if not payloads:
            return pd.DataFrame()

        return pd.json_normalize(payloads)

    def resolve_raw(self, m: FieldMapping, row: Mapping[str, str]) -> Tuple[Optional[str], Any]:
        """Return ``(source, raw)`` where source is ``"column"``, ``"default"`` or ``None``."""
        if m.csv_header and row.get(m.csv_header) is not None:
            return "column", row[m.csv_header]

        if m.default_value:
            return "default", m.default_value

        return None, None

    def _build(self, row: Mapping[str, str]) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
        payload: Dict[str, Any] = {}
        traces: List[Dict[str, Any]] = []

        for m in self._mappings:
            source, raw = self.resolve_raw(m, row)
            if source is None:
                self._count("payload.fields_skipped")
                traces.append({"json_path": m.json_path, "source": "skipped"})
                continue

            branch, value = self._value_for(m, raw)
            set_deep(payload, m.json_path, value)
            traces.append({"json_path": m.json_path, "source": source, "raw": raw, "branch": branch, "value": value})

        return payload, traces

    def _value_for(self, m: FieldMapping, raw: Any) -> Tuple[str, Any]:
        t = m.transformation

        if m.data_type == "array_object" and isinstance(raw, str) and m.csv_header:
            return "structured", self._structured_items(m, raw)

        final: Any = raw
        branch = "direct"
        if t is not None and t.enabled and isinstance(raw, str):
            branch = "split"
            parts = [p for p in split_list(raw, t.separator or DEFAULT_SEPARATOR) if p]
            if t.item_separator:
                index = t.item_index if t.item_index is not None else 0
                parts = [pick_token(p, t.item_separator, index) for p in parts]
            final = parts

        if m.data_type.startswith("array_") and not isinstance(final, list):
            final = [final]

        if isinstance(final, list):
            return branch, [self._cast(v, m.data_type) for v in final]

        return branch, self._cast(final, m.data_type)

    def _structured_items(self, m: FieldMapping, raw: str) -> List[Dict[str, Any]]:
        t = m.transformation
        separator = (t.separator if t else None) or DEFAULT_SEPARATOR
        item_separator = (t.item_separator if t else None) or DEFAULT_ITEM_SEPARATOR

        out: List[Dict[str, Any]] = []
        for item in split_list(raw, separator):
            cleaned = strip_wrapping(item)
            if not m.internal_fields:
                out.append({"raw": cleaned})
                continue

            tokens = split_list(cleaned, item_separator)
            obj: Dict[str, Any] = {}
            for f in m.internal_fields:
                token = tokens[f.index] if 0 <= f.index < len(tokens) else ""
                set_deep(obj, f.key, self._cast(token, f.data_type))
            out.append(obj)

        return out

    def _cast(self, raw: Any, data_type: str) -> Any:
        return cast_value(raw, data_type, on_fallback=self._on_cast_fallback)

    def _on_cast_fallback(self, data_type: str, text: str) -> None:
        self._count("payload.cast_defaults")
        if self._config.logger:
            self._config.logger.debug("Could not cast %r to %s; using zero value", text, data_type)

    def _count(self, name: str) -> None:
        if self._config.metrics_increment:
            self._config.metrics_increment(name, 1)


def construct_payload(row: Mapping[str, str], mappings: Sequence[MappingLike]) -> Dict[str, Any]:
    return PayloadBuilder(mappings).build(row)
