from __future__ import annotations
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .types import Json


ARRAY_MARKER = "[]"


class PathSyntaxError(ValueError):
    pass


class PathSegment(NamedTuple):
    key: str
    is_array: bool = False

    def __str__(self) -> str:
        return f"{self.key}{ARRAY_MARKER}" if self.is_array else self.key


def parse_path(path: Optional[str]) -> Tuple[PathSegment, ...]:
    """
    Split a dotted path into segments.

    A segment ending in ``[]`` is an array expansion point:
      - name                 e.g. user
      - name[]               e.g. items[]

    Examples:
      customer.address.city
      items[].id
      legs[].stops[].code
    """
    if not path:
        return ()

    segments: List[PathSegment] = []
    for raw in path.split("."):
        if raw.endswith(ARRAY_MARKER):
            segments.append(PathSegment(raw[: -len(ARRAY_MARKER)], True))
        else:
            segments.append(PathSegment(raw, False))

    return tuple(segments)


def check_path(path: Optional[str]) -> Tuple[PathSegment, ...]:
    """Strict variant of :func:`parse_path` used by mapping validation."""
    if not path:
        raise PathSyntaxError("Path must be a non-empty string.")

    segments = parse_path(path)
    for seg in segments:
        if not seg.key:
            raise PathSyntaxError(f"Empty segment in path '{path}'")

        if "[" in seg.key or "]" in seg.key:
            raise PathSyntaxError(f"Malformed segment '{seg}' in path '{path}'")

    return segments


def set_deep(root: Dict[str, Any], path: Optional[str], value: Json) -> None:
    """
    Write ``value`` into ``root`` at ``path``, creating objects and arrays on the way.

    An array segment distributes the i-th element of ``value`` (wrapped into a
    list when it is not one) over the i-th object of the destination array.
    Sibling writes under the same array prefix extend the existing elements.
    """
    segments = parse_path(path)
    if not segments:
        return

    last = len(segments) - 1
    frontier: List[Tuple[Dict[str, Any], Any]] = [(root, value)]

    for pos, seg in enumerate(segments):
        next_frontier: List[Tuple[Dict[str, Any], Any]] = []

        for target, val in frontier:
            if not seg.is_array:
                if pos == last:
                    target[seg.key] = val
                    continue

                child = target.get(seg.key)
                if not isinstance(child, dict):
                    child = {}
                    target[seg.key] = child

                next_frontier.append((child, val))
                continue

            items = list(val) if isinstance(val, list) else [val]
            if pos == last:
                target[seg.key] = items
                continue

            arr = target.get(seg.key)
            if not isinstance(arr, list):
                arr = []
                target[seg.key] = arr

            for i, item in enumerate(items):
                while len(arr) <= i:
                    arr.append({})

                if not isinstance(arr[i], dict):
                    arr[i] = {}

                next_frontier.append((arr[i], item))

        frontier = next_frontier


_MISSING = object()


def get_deep(root: Json, path: Optional[str], default: Any = None) -> Any:
    """
    Read the value at ``path``, or ``default`` when any segment is absent.

    An array segment followed by more path collects one value per element,
    so ``get_deep({"a": [{"b": 1}, {}]}, "a[].b")`` gives ``[1, None]``.
    """
    segments = parse_path(path)
    if not segments:
        return default

    cur = _walk(root, segments, default)
    return default if cur is _MISSING else cur


def _walk(cur: Any, segments: Tuple[PathSegment, ...], default: Any) -> Any:
    for pos, seg in enumerate(segments):
        if not isinstance(cur, dict) or seg.key not in cur:
            return _MISSING

        cur = cur[seg.key]
        if not seg.is_array:
            continue

        if not isinstance(cur, list):
            return _MISSING

        rest = segments[pos + 1:]
        if not rest:
            return cur

        out: List[Any] = []
        for el in cur:
            res = _walk(el, rest, default)
            out.append(default if res is _MISSING else res)

        return out

    return cur
