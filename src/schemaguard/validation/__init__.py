"""
Schema Validation Engine for SchemaGuard.

Validates arbitrary JSON-compatible values against declarative schemas,
supporting both draft 3 (boolean ``required``, ``extends``, ``disallow``,
``divisibleBy``) and draft 4 (list ``required``, ``allOf``/``anyOf``/
``oneOf``/``not``, ``multipleOf``) keywords:
- Combinators and type/disallow checks
- Number, string, array and object constraints
- date/time/datetime-local formats and IP address formats
- Custom validators (global registry and per instance)
- Error deduplication with occurrence counts

Example:
    >>> from schemaguard.validation import Validator
    >>> validator = Validator({
    ...     "type": "object",
    ...     "properties": {"a": {"type": "string"}},
    ...     "additionalProperties": False,
    ... })
    >>> [e.to_dict() for e in validator.validate({"a": "x", "b": 1})]
    [{'path': 'root', 'property': 'additionalProperties', 'message': 'No additional properties allowed, but property b is set', 'errorcount': 1}]
"""

from .context import UNDEFINED, ValidationContext
from .custom import (
    IPAddressValidator,
    register_validator,
    unregister_validator,
    registered_validators,
    clear_validators,
)
from .errors import ErrorKind, ValidationError, deduplicate_errors
from .fit import DEFAULT_WEIGHT, FitScore, best_fit, fit_test
from .type_checker import canonical_json
from .validator import Validator, validate, validate_node

__all__ = [
    "UNDEFINED",
    "ValidationContext",
    "IPAddressValidator",
    "register_validator",
    "unregister_validator",
    "registered_validators",
    "clear_validators",
    "ErrorKind",
    "ValidationError",
    "deduplicate_errors",
    "DEFAULT_WEIGHT",
    "FitScore",
    "best_fit",
    "fit_test",
    "canonical_json",
    "Validator",
    "validate",
    "validate_node",
]
