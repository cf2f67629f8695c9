from typing import Any, Dict, List, Literal, Union

Json = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

DataType = Literal["string", "number", "boolean", "object", "array_string", "array_number", "array_object"]

DATA_TYPES = ("string", "number", "boolean", "object", "array_string", "array_number", "array_object")
