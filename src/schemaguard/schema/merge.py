"""
Merge and well-formedness helpers for JSON Schemas.

Schemas handed to the validator are read-only: every merge here returns a
new dictionary and never mutates its inputs.

- extend_schema: schema extension used for ``$ref`` and ``describedby``
  expansion (objects merged, arrays replaced, ``required`` lists unioned)
- merge_all: fold a list of schemas, first is lowest priority
- check_schema: validate a schema document against its metaschema

Example:
    >>> base = {"type": "object", "required": ["a"], "properties": {"a": {"type": "string"}}}
    >>> overlay = {"required": ["b"], "properties": {"b": {"type": "number"}}}
    >>> extend_schema(base, overlay)["required"]
    ['a', 'b']
"""

import copy
from typing import Any, Dict, List, Mapping, Optional


def extend_schema(
    base: Optional[Mapping[str, Any]],
    overlay: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Extend ``base`` with ``overlay``, the way referenced schemas are combined.

    Merge rules:
    - Objects (dicts) are recursively extended
    - Two list-form ``required`` keywords are unioned (base order first)
    - Other arrays are replaced, not concatenated
    - Scalars use last-wins (overlay overrides base), including None

    Args:
        base: Schema being extended (lower priority). Can be None.
        overlay: Extending schema (higher priority). Can be None.

    Returns:
        New merged schema dictionary

    Examples:
        >>> extend_schema({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}

        >>> extend_schema({"enum": [1, 2, 3]}, {"enum": [4, 5]})
        {'enum': [4, 5]}
    """
    if base is None and overlay is None:
        return {}
    if overlay is None:
        return copy.deepcopy(dict(base))
    if base is None:
        return copy.deepcopy(dict(overlay))

    result = copy.deepcopy(dict(base))
    for key, overlay_value in overlay.items():
        base_value = result.get(key)
        if key == "required" and isinstance(base_value, list) and isinstance(overlay_value, list):
            merged = list(base_value)
            merged.extend(v for v in overlay_value if v not in merged)
            result[key] = merged
        elif isinstance(base_value, Mapping) and isinstance(overlay_value, Mapping):
            result[key] = extend_schema(base_value, overlay_value)
        elif isinstance(overlay_value, (Mapping, list)):
            result[key] = copy.deepcopy(overlay_value)
        else:
            result[key] = overlay_value
    return result


def merge_all(schemas: List[Optional[Mapping[str, Any]]]) -> Dict[str, Any]:
    """
    Extend schemas in order (first is lowest priority, last is highest).

    Args:
        schemas: Schemas to merge. None entries are skipped.

    Returns:
        Merged schema. Returns empty dict if input is empty or all None.
    """
    result: Dict[str, Any] = {}
    for schema in schemas:
        if schema is not None:
            result = extend_schema(result, schema)
    return result


def _uses_boolean_required(schema: Any) -> bool:
    """Return True if any node in the schema tree uses draft 3 boolean ``required``."""
    if isinstance(schema, Mapping):
        if isinstance(schema.get("required"), bool):
            return True
        return any(_uses_boolean_required(v) for v in schema.values())
    if isinstance(schema, list):
        return any(_uses_boolean_required(v) for v in schema)
    return False


def check_schema(schema: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate a schema document against the draft 3 or draft 4 metaschema.

    Schemas using boolean ``required`` are checked against draft 3, all
    others against draft 4.

    Args:
        schema: JSON Schema to check

    Returns:
        Dict with 'valid' (bool), 'draft' (str) and 'errors' (list of str)
    """
    from jsonschema import Draft3Validator, Draft4Validator

    if _uses_boolean_required(schema):
        validator_class, draft = Draft3Validator, "draft3"
    else:
        validator_class, draft = Draft4Validator, "draft4"

    meta_validator = validator_class(validator_class.META_SCHEMA)
    errors = []
    for error in sorted(meta_validator.iter_errors(dict(schema)), key=lambda e: [str(p) for p in e.path]):
        location = "/".join(str(p) for p in error.path) or "<root>"
        errors.append(f"{location}: {error.message}")

    return {
        "valid": len(errors) == 0,
        "draft": draft,
        "errors": errors,
    }
