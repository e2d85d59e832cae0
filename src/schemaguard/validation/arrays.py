"""
Array constraints: items/additionalItems, maxItems, minItems, uniqueItems.

``items`` may be one schema (every element) or a list of schemas (tuple
mode). In tuple mode, elements past the list follow ``additionalItems``:
true stops checking, a schema validates each remaining element, false
reports one error and stops, and absent stops silently.
"""

from typing import Any, Dict, List, Mapping, Sequence

from .context import ValidationContext
from .errors import ValidationError
from .type_checker import canonical_json


def validate_items(schema: Mapping[str, Any], value: Sequence[Any], path: str, ctx: ValidationContext) -> List[ValidationError]:
    items = schema["items"]
    errors: List[ValidationError] = []

    if isinstance(items, Mapping):
        for i, element in enumerate(value):
            errors.extend(ctx.recurse(items, element, f"{path}.{i}"))
        return errors

    if not isinstance(items, list):
        return ctx.malformed("items", path, "must be a schema or an array of schemas")

    additional = schema.get("additionalItems")
    for i, element in enumerate(value):
        if i < len(items):
            errors.extend(ctx.recurse(items[i], element, f"{path}.{i}"))
        elif additional is True:
            break
        elif isinstance(additional, Mapping):
            errors.extend(ctx.recurse(additional, element, f"{path}.{i}"))
        elif additional is False:
            errors.append(ctx.error(path, "additionalItems", "error_additionalItems"))
            break
        else:
            break
    return errors


def _item_limit(keyword: str, schema: Mapping[str, Any]) -> Any:
    limit = schema[keyword]
    if isinstance(limit, bool) or not isinstance(limit, int):
        return None
    return limit


def validate_max_items(schema: Mapping[str, Any], value: Sequence[Any], path: str, ctx: ValidationContext) -> List[ValidationError]:
    limit = _item_limit("maxItems", schema)
    if limit is None:
        return ctx.malformed("maxItems", path, "must be an integer")
    if len(value) > limit:
        return [ctx.error(path, "maxItems", "error_maxItems", [limit])]
    return []


def validate_min_items(schema: Mapping[str, Any], value: Sequence[Any], path: str, ctx: ValidationContext) -> List[ValidationError]:
    limit = _item_limit("minItems", schema)
    if limit is None:
        return ctx.malformed("minItems", path, "must be an integer")
    if len(value) < limit:
        return [ctx.error(path, "minItems", "error_minItems", [limit])]
    return []


def validate_unique_items(schema: Mapping[str, Any], value: Sequence[Any], path: str, ctx: ValidationContext) -> List[ValidationError]:
    if schema["uniqueItems"] is not True:
        return []
    seen = set()
    for element in value:
        stringified = canonical_json(element)
        if stringified in seen:
            return [ctx.error(path, "uniqueItems", "error_uniqueItems")]
        seen.add(stringified)
    return []


ARRAY_KEYWORDS: Dict[str, Any] = {
    "items": validate_items,
    "maxItems": validate_max_items,
    "minItems": validate_min_items,
    "uniqueItems": validate_unique_items,
}


def validate_array(schema: Mapping[str, Any], value: Sequence[Any], path: str, ctx: ValidationContext) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for keyword, handler in ARRAY_KEYWORDS.items():
        if keyword in schema:
            errors.extend(handler(schema, value, path, ctx))
    return errors
