from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .exceptions import MappingError
from .models import FieldMapping, normalize_mappings
from .path import PathSyntaxError, check_path, parse_path


def validate_mappings(mappings: Any, *, raise_on_error: bool = False) -> Tuple[bool, List[str]]:
    """
    Static checks for a mapping list.

    The payload engine does not need this pass: it applies mappings in order
    and lets the last write win. This catches the schemas where that would
    silently lose data.
    """
    errors: List[str] = []

    def err(msg: str, path: str = "$") -> None:
        errors.append(f"{path}: {msg}")

    try:
        items = normalize_mappings(mappings)
    except MappingError as e:
        err(str(e))
        return _finish(errors, raise_on_error)

    # key -> (kind, mapping position); an array_object leaf counts as an array of objects
    shapes: Dict[str, Tuple[str, int]] = {}
    seen: Dict[str, int] = {}

    for pos, m in enumerate(items):
        loc = f"$[{pos}]"
        try:
            segments = check_path(m.json_path)
        except PathSyntaxError as e:
            err(str(e), f"{loc}.jsonPath")
            continue

        if m.json_path in seen:
            err(f"Duplicate jsonPath '{m.json_path}' (also mapping #{seen[m.json_path]})", f"{loc}.jsonPath")
        else:
            seen[m.json_path] = pos

        prefix = ""
        for depth, seg in enumerate(segments):
            prefix = f"{prefix}.{seg.key}" if prefix else seg.key
            is_last = depth == len(segments) - 1
            if is_last and m.data_type == "array_object":
                kind = "array of objects"
            elif seg.is_array:
                kind = "array" if is_last else "array of objects"
            elif is_last:
                kind = "leaf"
            else:
                kind = "object"

            prev = shapes.get(prefix)
            if prev is None:
                shapes[prefix] = (kind, pos)
                continue

            prev_kind, prev_pos = prev
            if prev_kind == kind or prev_pos == pos:
                continue

            if kind == "object" and prev_kind == "leaf":
                err(f"'{prefix}' is a value in mapping #{prev_pos} but has children here", f"{loc}.jsonPath")
            elif kind == "leaf" and prev_kind == "object":
                err(f"'{prefix}' has children in mapping #{prev_pos} but is a value here", f"{loc}.jsonPath")
            else:
                err(f"'{prefix}' is used as {prev_kind} in mapping #{prev_pos} and as {kind} here", f"{loc}.jsonPath")

        _validate_options(m, loc=loc, add_err=err)

    return _finish(errors, raise_on_error)


def _validate_options(m: FieldMapping, *, loc: str, add_err) -> None:
    t = m.transformation
    if t is not None and t.item_index is not None and t.item_index < 0:
        add_err("'itemIndex' must not be negative.", f"{loc}.transformation.itemIndex")

    if m.internal_fields and m.data_type != "array_object":
        add_err(f"'internalFields' are only used with dataType 'array_object' (got '{m.data_type}').", f"{loc}.internalFields")

    for i, f in enumerate(m.internal_fields):
        if not f.key or not parse_path(f.key):
            add_err("Internal field 'key' must be a non-empty string.", f"{loc}.internalFields[{i}].key")
        if f.index < 0:
            add_err("Internal field 'index' must not be negative.", f"{loc}.internalFields[{i}].index")


def _finish(errors: List[str], raise_on_error: bool) -> Tuple[bool, List[str]]:
    if errors and raise_on_error:
        raise MappingError("Invalid mappings:\n- " + "\n- ".join(errors))
    return (len(errors) == 0, errors)
