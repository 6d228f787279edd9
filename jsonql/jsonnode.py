"""Classification of decoded JSON nodes."""

from enum import Enum
from typing import Any, Dict, List

JsonNode = Dict[str, 'JsonNode'] | List['JsonNode'] | str | bool | int | float | None


class JsonKind(Enum):
    """The closed set of shapes a decoded JSON node can take."""
    NULL = 'null'
    BOOLEAN = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    OBJECT = 'object'
    ARRAY = 'array'
    UNKNOWN = 'unknown'

    @property
    def is_scalar(self) -> bool:
        return self not in (JsonKind.OBJECT, JsonKind.ARRAY)


def kind_of(value: Any) -> JsonKind:
    """Classify a decoded JSON value."""
    if value is None:
        return JsonKind.NULL
    # bool is a subclass of int in Python, so check bool first
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if isinstance(value, list):
        return JsonKind.ARRAY
    return JsonKind.UNKNOWN
