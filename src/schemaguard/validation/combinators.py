"""
Type-agnostic keywords: enum, allOf/extends, anyOf, oneOf, not, type, disallow.

Each handler takes ``(schema, value, path, ctx)`` and returns a list of
ValidationError records. Sub-schemas are validated through
``ctx.recurse``, so nested results are concatenated raw and only the
outermost call deduplicates.
"""

from typing import Any, Dict, List, Mapping

from .context import ValidationContext
from .errors import ValidationError
from .type_checker import canonical_json, check_type

DATE_FORMATS = ("date", "time", "datetime-local")


def validate_enum(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    members = schema["enum"]
    if not isinstance(members, list):
        return ctx.malformed("enum", path, "must be an array")
    stringified = canonical_json(value)
    if any(stringified == canonical_json(member) for member in members):
        return []
    return [ctx.error(path, "enum", "error_enum")]


def _validate_all(keyword: str, schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    subschemas = schema[keyword]
    # Draft 3 allows a single schema for extends
    if keyword == "extends" and isinstance(subschemas, Mapping):
        subschemas = [subschemas]
    if not isinstance(subschemas, list):
        return ctx.malformed(keyword, path, "must be an array of schemas")
    errors: List[ValidationError] = []
    for subschema in subschemas:
        errors.extend(ctx.recurse(subschema, value, path))
    return errors


def validate_all_of(schema, value, path, ctx):
    return _validate_all("allOf", schema, value, path, ctx)


def validate_extends(schema, value, path, ctx):
    return _validate_all("extends", schema, value, path, ctx)


def validate_any_of(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    subschemas = schema["anyOf"]
    if not isinstance(subschemas, list):
        return ctx.malformed("anyOf", path, "must be an array of schemas")
    if any(not ctx.recurse(subschema, value, path) for subschema in subschemas):
        return []
    return [ctx.error(path, "anyOf", "error_anyOf")]


def validate_one_of(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    """
    Valid iff exactly one branch validates.

    On failure, reports a summary error followed by every branch's errors
    with ``<path>.oneOf[i]`` spliced into their paths.
    """
    subschemas = schema["oneOf"]
    if not isinstance(subschemas, list):
        return ctx.malformed("oneOf", path, "must be an array of schemas")

    valid = 0
    branch_errors: List[ValidationError] = []
    for i, subschema in enumerate(subschemas):
        result = ctx.recurse(subschema, value, path)
        if not result:
            valid += 1
        for error in result:
            suffix = error.path[len(path):]
            branch_errors.append(
                ValidationError(
                    path=f"{path}.oneOf[{i}]{suffix}",
                    property=error.property,
                    message=error.message,
                    errorcount=error.errorcount,
                )
            )

    if valid == 1:
        return []
    return [ctx.error(path, "oneOf", "error_oneOf", [valid])] + branch_errors


def validate_not(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    inner = schema["not"]
    if not isinstance(inner, Mapping):
        return ctx.malformed("not", path, "must be a schema")
    if ctx.recurse(inner, value, path):
        return []
    return [ctx.error(path, "not", "error_not")]


def validate_type(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    type_ = schema["type"]
    if isinstance(type_, list):
        if any(check_type(t, value, path, ctx) for t in type_):
            return []
        return [ctx.error(path, "type", "error_type_union")]

    if schema.get("format") in DATE_FORMATS and type_ == "integer":
        # Epoch timestamps are checked by the date format validator
        if not check_type("string", str(value), path, ctx):
            return [ctx.error(path, "type", "error_type", [schema["format"]])]
        return []

    if not check_type(type_, value, path, ctx):
        return [ctx.error(path, "type", "error_type", [type_])]
    return []


def validate_disallow(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    disallow = schema["disallow"]
    if isinstance(disallow, list):
        if any(check_type(t, value, path, ctx) for t in disallow):
            return [ctx.error(path, "disallow", "error_disallow_union")]
        return []
    if check_type(disallow, value, path, ctx):
        return [ctx.error(path, "disallow", "error_disallow", [disallow])]
    return []


# Evaluated in this order whenever the keyword is present.
COMBINATOR_KEYWORDS: Dict[str, Any] = {
    "enum": validate_enum,
    "extends": validate_extends,
    "allOf": validate_all_of,
    "anyOf": validate_any_of,
    "oneOf": validate_one_of,
    "not": validate_not,
    "type": validate_type,
    "disallow": validate_disallow,
}
