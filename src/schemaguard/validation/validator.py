"""
Schema Validator (orchestrator).

Walks a schema and a value together and returns every validation error:

1. Expand the schema's ``$ref`` chain (a new dict; the input is untouched)
2. Absent value: only the legacy boolean ``required`` rule applies
3. Type-agnostic keywords (enum, extends, allOf, anyOf, oneOf, not, type, disallow)
4. Keywords for the value's kind (number, string, array, object; null has none)
5. ``describedby`` links, expanded and validated at the same path
6. date/time/datetime-local formats
7. Custom validators (built-in, global, per instance)

Errors from nested calls are concatenated raw; the public entry points
deduplicate the assembled list once.

Example:
    >>> validator = Validator({"type": "string", "minLength": 1})
    >>> [e.message for e in validator.validate("")]
    ['Value required']
"""

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional

from ..exceptions import InvalidValueError, SchemaRecursionError, UnresolvableReferenceError
from ..messages import default_translator
from ..numeric import NumericBackend, get_backend
from ..schema.resolver import RefResolver
from ..settings import ValidatorSettings
from .arrays import validate_array
from .combinators import COMBINATOR_KEYWORDS, DATE_FORMATS
from .context import (
    UNDEFINED,
    CustomValidator,
    EditorLookup,
    RichFormatLookup,
    ValidationContext,
)
from .custom import run_custom_validators
from .errors import ValidationError, deduplicate_errors
from .fit import DEFAULT_WEIGHT, FitScore, fit_test
from .formats import validate_date_time
from .numbers import validate_number
from .objects import validate_object
from .strings import validate_string
from .type_checker import is_array, is_number, is_object, is_string

logger = logging.getLogger(__name__)


def validate_legacy_required(schema: Mapping[str, Any], path: str, ctx: ValidationContext) -> List[ValidationError]:
    required = schema.get("required", UNDEFINED)
    if required is True or (required is UNDEFINED and ctx.settings.required_by_default):
        return [ctx.error(path, "required", "error_notset")]
    if required is not UNDEFINED and not isinstance(required, (bool, list)):
        return ctx.malformed("required", path, "must be an array or a boolean")
    return []


def validate_by_value_type(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    if value is None:
        return []
    if is_number(value):
        return validate_number(schema, value, path, ctx)
    if is_string(value):
        return validate_string(schema, value, path, ctx)
    if is_array(value):
        return validate_array(schema, value, path, ctx)
    if is_object(value):
        return validate_object(schema, value, path, ctx)
    return []


def _describedby_index(schema: Mapping[str, Any]) -> Optional[int]:
    links = schema.get("links")
    if not isinstance(links, list):
        return None
    for index, link in enumerate(links):
        rel = link.get("rel") if isinstance(link, Mapping) else None
        if isinstance(rel, str) and rel.lower() == "describedby":
            return index
    return None


def validate_linked(schema: Mapping[str, Any], value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    index = _describedby_index(schema)
    if index is None or ctx.resolver is None:
        return []
    try:
        linked = ctx.resolver.expand_link(schema, index, ctx.root_value)
    except UnresolvableReferenceError as e:
        if ctx.settings.strict:
            raise
        logger.warning(f"Ignoring unresolvable describedby link at {path}: {e}")
        return []
    return ctx.recurse(linked, value, path)


def validate_node(schema: Any, value: Any, path: str, ctx: ValidationContext) -> List[ValidationError]:
    """
    Validate ``value`` against ``schema`` without deduplicating.

    Args:
        schema: Schema node (read-only)
        value: Value, or UNDEFINED when absent
        path: Dot-separated value path
        ctx: Validation context

    Returns:
        Raw list of ValidationError records in traversal order
    """
    if not isinstance(schema, Mapping):
        return ctx.malformed("schema", path, f"must be an object, got {type(schema).__name__}")
    schema = ctx.expand(schema, path)

    if value is UNDEFINED:
        return validate_legacy_required(schema, path, ctx)

    errors: List[ValidationError] = []
    for keyword, handler in COMBINATOR_KEYWORDS.items():
        if keyword in schema:
            errors.extend(handler(schema, value, path, ctx))

    errors.extend(validate_by_value_type(schema, value, path, ctx))
    errors.extend(validate_linked(schema, value, path, ctx))

    if schema.get("format") in DATE_FORMATS:
        errors.extend(validate_date_time(schema, value, path, ctx))

    errors.extend(run_custom_validators(schema, value, path, ctx))
    return errors


class Validator:
    """
    Validate values against one schema.

    Attributes:
        schema: Root schema (never mutated)
        settings: Effective ValidatorSettings
        translate: translate(key, args) -> message
        backend: Numeric backend
        resolver: Reference resolver
        lookup_editor: Optional ``required`` relaxation hook
        rich_format_validator: Optional date/time check hook
        custom_validators: Per-instance custom validators

    Example:
        >>> validator = Validator(
        ...     {"type": "number", "multipleOf": 0.01},
        ...     numeric_backend="decimal",
        ... )
        >>> validator.is_valid(1.14)
        True
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        settings: Optional[ValidatorSettings] = None,
        *,
        translate: Optional[Callable[..., str]] = None,
        resolver: Optional[RefResolver] = None,
        refs: Optional[Mapping[str, Mapping[str, Any]]] = None,
        lookup_editor: Optional[EditorLookup] = None,
        rich_format_validator: Optional[RichFormatLookup] = None,
        custom_validators: Optional[Iterable[CustomValidator]] = None,
        backend: Optional[NumericBackend] = None,
        **overrides: Any,
    ):
        self.schema = schema
        self.settings = (settings or ValidatorSettings()).merge(**overrides)
        self.translate = translate or default_translator(self.settings.language)
        self.backend = backend or get_backend(self.settings.numeric_backend.value)
        if resolver is None:
            resolver = RefResolver(schema, refs=refs, base_uri=self.settings.base_uri)
        self.resolver = resolver
        self.lookup_editor = lookup_editor
        self.rich_format_validator = rich_format_validator
        self.custom_validators = tuple(custom_validators or ())

    def _context(self, root_value: Any) -> ValidationContext:
        return ValidationContext(
            settings=self.settings,
            translate=self.translate,
            backend=self.backend,
            resolver=self.resolver,
            lookup_editor=self.lookup_editor,
            rich_format_validator=self.rich_format_validator,
            custom_validators=self.custom_validators,
            root_value=root_value,
        )

    def validate(self, value: Any = UNDEFINED) -> List[ValidationError]:
        """
        Validate a value against the root schema.

        Args:
            value: Value to validate (UNDEFINED for an absent value)

        Returns:
            Deduplicated errors in traversal order (empty when valid)

        Raises:
            SchemaRecursionError: If the schema recurses past ``max_depth``
            SchemaConfigurationError: Malformed constraint (strict mode only)
            UnresolvableReferenceError: Unknown reference (strict mode only)
        """
        try:
            raw = validate_node(self.schema, value, "root", self._context(value))
        except RecursionError:
            raise SchemaRecursionError("root", self.settings.max_depth)
        errors = deduplicate_errors(raw)
        logger.debug(f"Validation finished with {len(errors)} error(s)")
        return errors

    def is_valid(self, value: Any = UNDEFINED) -> bool:
        """Return True if the value has no validation errors."""
        return not self.validate(value)

    def assert_valid(self, value: Any = UNDEFINED) -> None:
        """
        Raise InvalidValueError if the value has validation errors.

        Raises:
            InvalidValueError: Contains all (deduplicated) errors
        """
        errors = self.validate(value)
        if errors:
            raise InvalidValueError(errors)

    def fit_test(
        self,
        value: Any,
        schema: Optional[Mapping[str, Any]] = None,
        weight: float = DEFAULT_WEIGHT,
    ) -> FitScore:
        """Score ``value`` against ``schema`` (default: the root schema)."""
        return fit_test(value, self.schema if schema is None else schema, weight, self.resolver)

    def __repr__(self) -> str:
        return f"Validator(backend={self.backend.name!r}, strict={self.settings.strict})"


def validate(schema: Mapping[str, Any], value: Any = UNDEFINED, **kwargs: Any) -> List[ValidationError]:
    """
    Validate ``value`` against ``schema`` in one call.

    Keyword arguments are passed to Validator (settings, collaborators or
    individual setting overrides such as ``required_by_default=True``).
    """
    return Validator(schema, **kwargs).validate(value)
