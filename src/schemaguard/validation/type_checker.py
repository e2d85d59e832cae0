"""
Runtime type checks for JSON-compatible values.

Maps schema type names to predicates:
- string, number, integer, boolean, array, object, null
- unknown names always match
- a nested schema "type" matches when the value validates against it

``bool`` is never a number here even though it subclasses ``int``.
"""

import json
import math
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping

from .context import ValidationContext


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float) and (math.isinf(value) or math.isnan(value)):
        return False
    return value == math.floor(value)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


TYPE_PREDICATES: Dict[str, Callable[[Any], bool]] = {
    "string": is_string,
    "number": is_number,
    "integer": is_integer,
    "boolean": lambda value: isinstance(value, bool),
    "array": is_array,
    "object": is_object,
    "null": lambda value: value is None,
}


def check_type(type_: Any, value: Any, path: str, ctx: ValidationContext) -> bool:
    """
    Return True if ``value`` matches a single type entry.

    Args:
        type_: A type name or a nested schema
        value: Value to check
        path: Value path (used for nested schema recursion)
        ctx: Validation context
    """
    if isinstance(type_, str):
        predicate = TYPE_PREDICATES.get(type_)
        return predicate(value) if predicate is not None else True
    if isinstance(type_, Mapping):
        return not ctx.recurse(type_, value, path)
    ctx.malformed("type", path, f"type entry must be a name or schema, got {type_!r}")
    return True


def _normalize(value: Any) -> Any:
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    return value


def canonical_json(value: Any) -> str:
    """
    Serialize a value for structural equality.

    Keys are sorted and integral floats are written as integers, so
    ``{"a": 1.0, "b": 2}`` and ``{"b": 2, "a": 1}`` serialize identically.
    """
    return json.dumps(
        _normalize(value), sort_keys=True, separators=(",", ":"), default=str
    )
