"""
Object constraints.

Evaluated in two phases over one object value:

1. maxProperties, minProperties, required (list form), properties,
   patternProperties. The last two record every key they validate.
2. additionalProperties (over keys not recorded in phase 1), dependencies.

The set of validated keys lives only for the duration of one
``validate_object`` call.
"""

import re
from typing import Any, Dict, List, Mapping, Set

from .context import UNDEFINED, ValidationContext
from .errors import ValidationError
from .strings import compile_pattern

# Editor kinds that carry no data and therefore never fail ``required``
NON_DATA_EDITORS = ("button", "info")


def _property_limit(keyword: str, schema: Mapping[str, Any]) -> Any:
    limit = schema[keyword]
    if isinstance(limit, bool) or not isinstance(limit, int):
        return None
    return limit


def validate_max_properties(schema, value, path, ctx, validated):
    limit = _property_limit("maxProperties", schema)
    if limit is None:
        return ctx.malformed("maxProperties", path, "must be an integer")
    if len(value) > limit:
        return [ctx.error(path, "maxProperties", "error_maxProperties", [limit])]
    return []


def validate_min_properties(schema, value, path, ctx, validated):
    limit = _property_limit("minProperties", schema)
    if limit is None:
        return ctx.malformed("minProperties", path, "must be an integer")
    if len(value) < limit:
        return [ctx.error(path, "minProperties", "error_minProperties", [limit])]
    return []


def _is_non_data_control(ctx: ValidationContext, path: str) -> bool:
    if ctx.lookup_editor is None:
        return False
    editor = ctx.lookup_editor(path)
    if not editor:
        return False
    return (editor.get("format") or editor.get("type")) in NON_DATA_EDITORS


def validate_required(
    schema: Mapping[str, Any],
    value: Mapping[str, Any],
    path: str,
    ctx: ValidationContext,
    validated: Set[str],
) -> List[ValidationError]:
    """List-form ``required``. Boolean ``required`` is handled for absent values."""
    required = schema["required"]
    if isinstance(required, bool):
        return []
    if not isinstance(required, list):
        return ctx.malformed("required", path, "must be an array or a boolean")
    errors: List[ValidationError] = []
    for name in required:
        if name in value:
            continue
        if _is_non_data_control(ctx, f"{path}.{name}"):
            continue
        errors.append(ctx.error(path, "required", "error_required", [name]))
    return errors


def validate_properties(schema, value, path, ctx, validated):
    properties = schema["properties"]
    if not isinstance(properties, Mapping):
        return ctx.malformed("properties", path, "must be an object")
    errors: List[ValidationError] = []
    for name, subschema in properties.items():
        validated.add(name)
        errors.extend(ctx.recurse(subschema, value.get(name, UNDEFINED), f"{path}.{name}"))
    return errors


def validate_pattern_properties(schema, value, path, ctx, validated):
    pattern_properties = schema["patternProperties"]
    if not isinstance(pattern_properties, Mapping):
        return ctx.malformed("patternProperties", path, "must be an object")
    errors: List[ValidationError] = []
    for pattern, subschema in pattern_properties.items():
        try:
            regex = compile_pattern(pattern)
        except re.error as e:
            errors.extend(ctx.malformed("patternProperties", path, f"invalid regular expression {pattern!r}: {e}"))
            continue
        for name, member in value.items():
            if regex.search(str(name)):
                validated.add(name)
                errors.extend(ctx.recurse(subschema, member, f"{path}.{name}"))
    return errors


def validate_additional_properties(
    additional: Any,
    value: Mapping[str, Any],
    path: str,
    ctx: ValidationContext,
    validated: Set[str],
) -> List[ValidationError]:
    errors: List[ValidationError] = []
    for name, member in value.items():
        if name in validated:
            continue
        if additional is False or additional is None:
            errors.append(ctx.error(path, "additionalProperties", "error_additional_properties", [name]))
            break
        if additional is True:
            break
        if not isinstance(additional, Mapping):
            return ctx.malformed("additionalProperties", path, "must be a boolean or a schema")
        errors.extend(ctx.recurse(additional, member, f"{path}.{name}"))
    return errors


def validate_dependencies(schema, value, path, ctx, validated):
    dependencies = schema["dependencies"]
    if not isinstance(dependencies, Mapping):
        return ctx.malformed("dependencies", path, "must be an object")
    errors: List[ValidationError] = []
    for name, dependency in dependencies.items():
        if name not in value:
            continue
        if isinstance(dependency, list):
            for needed in dependency:
                if needed not in value:
                    errors.append(ctx.error(path, "dependencies", "error_dependency", [needed]))
        elif isinstance(dependency, Mapping):
            errors.extend(ctx.recurse(dependency, value, path))
        else:
            errors.extend(ctx.malformed("dependencies", path, f"dependency for {name!r} must be an array or a schema"))
    return errors


OBJECT_KEYWORDS: Dict[str, Any] = {
    "maxProperties": validate_max_properties,
    "minProperties": validate_min_properties,
    "required": validate_required,
    "properties": validate_properties,
    "patternProperties": validate_pattern_properties,
}


def validate_object(schema: Mapping[str, Any], value: Mapping[str, Any], path: str, ctx: ValidationContext) -> List[ValidationError]:
    validated: Set[str] = set()
    errors: List[ValidationError] = []

    for keyword, handler in OBJECT_KEYWORDS.items():
        if keyword in schema:
            errors.extend(handler(schema, value, path, ctx, validated))

    if "additionalProperties" in schema:
        errors.extend(validate_additional_properties(schema["additionalProperties"], value, path, ctx, validated))
    elif (
        ctx.settings.no_additional_properties
        and "oneOf" not in schema
        and "anyOf" not in schema
    ):
        # Does not apply to schemas composed with oneOf/anyOf
        errors.extend(validate_additional_properties(False, value, path, ctx, validated))

    if "dependencies" in schema:
        errors.extend(validate_dependencies(schema, value, path, ctx, validated))
    return errors
