from __future__ import annotations

import json
import math
import re
from typing import Any, Callable, List, Optional, Union

from .types import Json

_INT_RE = re.compile(r"^[+-]?\d+$")
_OPENERS = "([{"
_CLOSERS = ")]}"

Number = Union[int, float]
FallbackHook = Optional[Callable[[str, str], None]]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def to_float(x: Any) -> Optional[float]:
    if x is None:
        return None

    try:
        return float(x)

    except (TypeError, ValueError):
        return None


def to_number(text: str) -> Optional[Number]:
    """Parse a numeric literal; ``None`` when the text is not a finite number."""
    s = text.strip()
    if not s or "_" in s:
        return None

    if _INT_RE.match(s):
        return int(s)

    num = to_float(s)
    if num is None or not math.isfinite(num):
        return None

    return num


def split_list(raw: str, separator: str) -> List[str]:
    if not separator:
        return [raw.strip()]

    return [part.strip() for part in raw.split(separator)]


def strip_wrapping(token: str) -> str:
    """Remove leading ``([{`` and trailing ``)]}`` runs, e.g. ``(HAN*SGN)`` -> ``HAN*SGN``."""
    return token.strip().lstrip(_OPENERS).rstrip(_CLOSERS).strip()


def pick_token(item: str, item_separator: str, index: int) -> str:
    tokens = split_list(strip_wrapping(item), item_separator)
    if 0 <= index < len(tokens):
        return tokens[index]

    return ""


def cast_value(raw: Any, data_type: str, *, on_fallback: FallbackHook = None) -> Json:
    """
    Convert a raw cell into ``data_type``. Never raises.

    Unparseable text degrades to the zero value of the type (``0``, ``{}``,
    ``[]``) and ``on_fallback(data_type, text)`` is called when that happens.
    """
    if raw is None or isinstance(raw, (dict, list)):
        return raw

    if isinstance(raw, bool):
        text = "true" if raw else "false"
    else:
        text = str(raw).strip()

    if data_type in ("number", "array_number"):
        if not text:
            return 0

        num = to_number(text)
        if num is None:
            if on_fallback:
                on_fallback(data_type, text)
            return 0

        return num

    if data_type == "boolean":
        return text.lower() == "true" or text == "1"

    if data_type in ("object", "array_object"):
        zero: Any = {} if data_type == "object" else []
        if not text:
            return zero

        try:
            return json.loads(text, parse_constant=_reject_constant)

        except (ValueError, RecursionError):
            if on_fallback:
                on_fallback(data_type, text)
            return zero

    return text
