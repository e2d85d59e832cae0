"""
Validation context shared by one top-level ``validate`` call.

The context is immutable: recursing produces a copy with a deeper
``depth``. It carries options and injected collaborators only, never
per-node state.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import (
    SchemaConfigurationError,
    SchemaRecursionError,
    UnresolvableReferenceError,
)
from ..numeric import NumericBackend
from ..settings import ValidatorSettings
from .errors import ValidationError

logger = logging.getLogger(__name__)


class _Undefined:
    """Marker for an absent value (distinct from JSON null / None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()

# lookup_editor(path) -> {"type": ..., "format": ...} or None
EditorLookup = Callable[[str], Optional[Mapping[str, Any]]]
# rich_format_validator(path) -> check(value) -> bool, or None
FormatCheck = Callable[[Any], bool]
RichFormatLookup = Callable[[str], Optional[FormatCheck]]
# custom_validator(schema, value, path) -> iterable of errors
CustomValidator = Callable[[Mapping[str, Any], Any, str], Any]


@dataclass(frozen=True)
class ValidationContext:
    """
    Options and collaborators for one validation pass.

    Attributes:
        settings: Validator options
        translate: translate(key, args) -> message
        backend: Numeric backend for range/divisibility checks
        resolver: ``$ref``/link resolver (None disables expansion)
        lookup_editor: Hook relaxing ``required`` for non-data controls
        rich_format_validator: Hook overriding date/time string matching
        custom_validators: Callbacks run after the built-in checks, in order
        root_value: Value passed to the outermost call (link href data)
        depth: Current recursion depth
    """

    settings: ValidatorSettings
    translate: Callable[..., str]
    backend: NumericBackend
    resolver: Any = None
    lookup_editor: Optional[EditorLookup] = None
    rich_format_validator: Optional[RichFormatLookup] = None
    custom_validators: Tuple[CustomValidator, ...] = ()
    root_value: Any = UNDEFINED
    depth: int = 0

    def recurse(self, schema: Any, value: Any, path: str) -> List[Any]:
        """Validate ``value`` against a sub-schema one level deeper (no dedup)."""
        from .validator import validate_node

        depth = self.depth + 1
        if depth > self.settings.max_depth:
            raise SchemaRecursionError(path, self.settings.max_depth)
        return validate_node(schema, value, path, replace(self, depth=depth))

    def expand(self, schema: Mapping[str, Any], path: str) -> Dict[str, Any]:
        """Return a shallow copy of ``schema`` with its ``$ref`` chain merged in."""
        if self.resolver is None or "$ref" not in schema:
            return dict(schema)
        try:
            return self.resolver.expand_refs(schema)
        except UnresolvableReferenceError as e:
            if self.settings.strict:
                raise
            logger.warning(f"Ignoring unresolvable reference at {path}: {e}")
            expanded = dict(schema)
            expanded.pop("$ref", None)
            return expanded

    def malformed(self, keyword: str, path: str, reason: str) -> List[Any]:
        """
        Handle an unusable constraint argument.

        Raises SchemaConfigurationError in strict mode; otherwise the
        constraint is skipped and no errors are reported.
        """
        if self.settings.strict:
            raise SchemaConfigurationError(keyword, path, reason)
        logger.debug(f"Skipping malformed '{keyword}' at {path}: {reason}")
        return []

    def error(
        self, path: str, prop: str, key: str, args: Optional[Sequence[Any]] = None
    ) -> ValidationError:
        """Build a ValidationError with a translated message."""
        return ValidationError(path=path, property=prop, message=self.translate(key, args))
