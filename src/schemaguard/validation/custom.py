"""
Custom validators.

A custom validator is any callable ``(schema, value, path)`` returning an
iterable of ValidationError records or ``{path, property, message}``
mappings. They run after all built-in keyword checks, in this order:

1. Built-in kind validators (IP addresses)
2. Globally registered validators (``register_validator``)
3. Validators passed to the Validator instance

Example:
    >>> def no_admin(schema, value, path):
    ...     if schema.get("format") == "username" and value == "admin":
    ...         return [{"path": path, "property": "format", "message": "Reserved name"}]
    ...     return []
    >>> register_validator(no_admin)
"""

import ipaddress
import logging
from typing import Any, Callable, List, Mapping

from .context import CustomValidator, ValidationContext
from .errors import ValidationError, coerce_errors

logger = logging.getLogger(__name__)

_GLOBAL_VALIDATORS: List[CustomValidator] = []


class IPAddressValidator:
    """Check ``ipv4``/``ipv6`` formats on string-typed schemas."""

    FORMATS = {
        "ipv4": (ipaddress.IPv4Address, "error_ipv4"),
        "ipv6": (ipaddress.IPv6Address, "error_ipv6"),
    }

    def __init__(self, translate: Callable[..., str]):
        self.translate = translate

    def __call__(self, schema: Mapping[str, Any], value: Any, path: str) -> List[ValidationError]:
        if schema.get("type") != "string" or schema.get("format") not in self.FORMATS:
            return []
        address_class, key = self.FORMATS[schema["format"]]
        try:
            address_class(value)
        except (ipaddress.AddressValueError, ValueError, TypeError):
            return [ValidationError(path=path, property="format", message=self.translate(key))]
        return []


def register_validator(validator: CustomValidator) -> None:
    """
    Register a custom validator for all Validator instances.

    Args:
        validator: Callable ``(schema, value, path)`` returning errors
    """
    if validator not in _GLOBAL_VALIDATORS:
        _GLOBAL_VALIDATORS.append(validator)
        logger.debug(f"Registered custom validator: {getattr(validator, '__name__', validator)!r}")


def unregister_validator(validator: CustomValidator) -> None:
    """Remove a globally registered validator (no-op if absent)."""
    if validator in _GLOBAL_VALIDATORS:
        _GLOBAL_VALIDATORS.remove(validator)


def registered_validators() -> List[CustomValidator]:
    """Get a copy of the globally registered validators, in order."""
    return list(_GLOBAL_VALIDATORS)


def clear_validators() -> None:
    """Remove all globally registered validators."""
    _GLOBAL_VALIDATORS.clear()


def run_custom_validators(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    validators: List[CustomValidator] = [IPAddressValidator(ctx.translate)]
    validators.extend(_GLOBAL_VALIDATORS)
    validators.extend(ctx.custom_validators)

    errors: List[ValidationError] = []
    for validator in validators:
        errors.extend(coerce_errors(validator(schema, value, path)))
    return errors
