"""
Number constraints: multipleOf, divisibleBy, maximum, minimum.

All arithmetic goes through ``ctx.backend``. With the default float
backend, boundary comparisons and divisibility are subject to binary
rounding (``1.14`` is not a multiple of ``0.01``); configure the decimal
backend for exact results.
"""

from typing import Any, Dict, List, Mapping

from .context import ValidationContext
from .errors import ValidationError
from .type_checker import is_number


def _validate_divisor(keyword: str, schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    divisor = schema[keyword]
    if not is_number(divisor) or divisor <= 0:
        return ctx.malformed(keyword, path, "must be a number greater than 0")
    if ctx.backend.is_multiple(value, divisor):
        return []
    return [ctx.error(path, keyword, "error_multipleOf", [divisor])]


def validate_multiple_of(schema, value, path, ctx):
    return _validate_divisor("multipleOf", schema, value, path, ctx)


def validate_divisible_by(schema, value, path, ctx):
    return _validate_divisor("divisibleBy", schema, value, path, ctx)


def validate_maximum(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    maximum = schema["maximum"]
    if not is_number(maximum):
        return ctx.malformed("maximum", path, "must be a number")
    exclusive = bool(schema.get("exclusiveMaximum"))
    cmp = ctx.backend.compare(value, maximum)
    # NaN is unordered and never within a bound
    if cmp is not None and (cmp < 0 or (cmp == 0 and not exclusive)):
        return []
    key = "error_maximum_excl" if exclusive else "error_maximum_incl"
    return [ctx.error(path, "maximum", key, [maximum])]


def validate_minimum(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    minimum = schema["minimum"]
    if not is_number(minimum):
        return ctx.malformed("minimum", path, "must be a number")
    exclusive = bool(schema.get("exclusiveMinimum"))
    cmp = ctx.backend.compare(value, minimum)
    if cmp is not None and (cmp > 0 or (cmp == 0 and not exclusive)):
        return []
    key = "error_minimum_excl" if exclusive else "error_minimum_incl"
    return [ctx.error(path, "minimum", key, [minimum])]


NUMBER_KEYWORDS: Dict[str, Any] = {
    "multipleOf": validate_multiple_of,
    "divisibleBy": validate_divisible_by,
    "maximum": validate_maximum,
    "minimum": validate_minimum,
}


def validate_number(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for keyword, handler in NUMBER_KEYWORDS.items():
        if keyword in schema:
            errors.extend(handler(schema, value, path, ctx))
    return errors
