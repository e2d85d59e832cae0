"""
Core Exception Classes for SchemaGuard.

Soft validation failures are never raised: the validator reports them as
``ValidationError`` records. The exceptions here cover the genuinely
exceptional cases:

- SchemaConfigurationError: a constraint argument is malformed (strict mode)
- UnresolvableReferenceError: a ``$ref`` or ``describedby`` link target is unknown
- SchemaRecursionError: recursion exceeded the configured depth or a ``$ref`` cycle
- InvalidValueError: raised on request by ``Validator.assert_valid``

Design Principle:
    exceptions.py (BASE - zero dependencies)
        ^
    schema/, numeric.py, settings.py
        ^
    validation/ (ENGINE)
"""

from typing import Any, Dict, List, Optional


class SchemaGuardError(Exception):
    """Base class for all SchemaGuard exceptions."""


class SchemaConfigurationError(SchemaGuardError):
    """
    Raised in strict mode when a schema keyword carries an unusable argument.

    Attributes:
        keyword: The offending schema keyword (e.g. "required", "pattern")
        path: Value path at which the keyword was evaluated
        reason: Human-readable description of the problem
    """

    def __init__(self, keyword: str, path: str, reason: str):
        self.keyword = keyword
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed '{keyword}' at {path}: {reason}")


class UnresolvableReferenceError(SchemaGuardError):
    """Raised when a ``$ref`` or link href cannot be resolved to a schema."""

    def __init__(self, ref: str, reason: Optional[str] = None):
        self.ref = ref
        self.reason = reason
        message = f"Unresolvable reference: {ref}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SchemaRecursionError(SchemaGuardError):
    """
    Raised when validation recurses deeper than ``max_depth``.

    Cyclic schemas (through ``allOf``/``extends``/``$ref`` chains) would
    otherwise recurse forever.
    """

    def __init__(self, path: str, depth: int):
        self.path = path
        self.depth = depth
        super().__init__(f"Maximum validation depth {depth} exceeded at {path}")


class InvalidValueError(SchemaGuardError):
    """
    Raised by ``Validator.assert_valid`` when a value has validation errors.

    Attributes:
        errors: List of ValidationError records (deduplicated)
    """

    def __init__(self, errors: List[Any]):
        self.errors = errors
        super().__init__(f"Validation failed: {len(errors)} error(s)")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to HTTP 422 response format.

        Returns:
            Dict with:
                - success: False
                - errors: List of error dicts
        """
        return {
            "success": False,
            "errors": [e.to_dict() for e in self.errors],
        }

    def __repr__(self) -> str:
        return f"InvalidValueError({len(self.errors)} errors)"
