"""
String constraints: maxLength, minLength, pattern.

Lengths are measured on ``str(value)``. Patterns use unanchored
``re.search`` semantics.
"""

import re
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Pattern

from .context import ValidationContext
from .errors import ValidationError


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile and cache a regular expression."""
    return re.compile(pattern)


def _length_limit(keyword: str, schema: Mapping[str, Any]) -> Any:
    limit = schema[keyword]
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        return None
    return limit


def validate_max_length(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    limit = _length_limit("maxLength", schema)
    if limit is None:
        return ctx.malformed("maxLength", path, "must be a non-negative integer")
    if len(str(value)) > limit:
        return [ctx.error(path, "maxLength", "error_maxLength", [limit])]
    return []


def validate_min_length(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    limit = _length_limit("minLength", schema)
    if limit is None:
        return ctx.malformed("minLength", path, "must be a non-negative integer")
    if len(str(value)) < limit:
        key = "error_notempty" if limit == 1 else "error_minLength"
        return [ctx.error(path, "minLength", key, [limit])]
    return []


def validate_pattern(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    pattern = schema["pattern"]
    if not isinstance(pattern, str):
        return ctx.malformed("pattern", path, "must be a string")
    try:
        regex = compile_pattern(pattern)
    except re.error as e:
        return ctx.malformed("pattern", path, f"invalid regular expression: {e}")
    if regex.search(str(value)):
        return []
    options = schema.get("options")
    if isinstance(options, Mapping) and options.get("patternmessage"):
        return [ValidationError(path=path, property="pattern", message=str(options["patternmessage"]))]
    return [ctx.error(path, "pattern", "error_pattern", [pattern])]


STRING_KEYWORDS: Dict[str, Any] = {
    "maxLength": validate_max_length,
    "minLength": validate_min_length,
    "pattern": validate_pattern,
}


def validate_string(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for keyword, handler in STRING_KEYWORDS.items():
        if keyword in schema:
            errors.extend(handler(schema, value, path, ctx))
    return errors
