"""
Validation Error Records and Deduplication.

Provides the structured error model returned by the validator:
- ValidationError: one soft failure at a value path
- ErrorKind: taxonomy tag derived from the failing keyword
- deduplicate_errors: collapse identical errors with an occurrence count
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union


class ErrorKind(str, Enum):
    """Category of a validation failure."""

    TYPE_MISMATCH = "type_mismatch"
    ENUM_MISMATCH = "enum_mismatch"
    COMBINATOR_FAILURE = "combinator_failure"
    RANGE_VIOLATION = "range_violation"
    DIVISIBILITY_VIOLATION = "divisibility_violation"
    LENGTH_VIOLATION = "length_violation"
    PATTERN_MISMATCH = "pattern_mismatch"
    CARDINALITY_VIOLATION = "cardinality_violation"
    UNIQUENESS_VIOLATION = "uniqueness_violation"
    REQUIRED_PROPERTY_MISSING = "required_property_missing"
    ADDITIONAL_PROPERTY_DISALLOWED = "additional_property_disallowed"
    DEPENDENCY_VIOLATION = "dependency_violation"
    FORMAT_VIOLATION = "format_violation"
    CUSTOM_VALIDATOR_FAILURE = "custom_validator_failure"


_KIND_BY_PROPERTY = {
    "type": ErrorKind.TYPE_MISMATCH,
    "disallow": ErrorKind.TYPE_MISMATCH,
    "enum": ErrorKind.ENUM_MISMATCH,
    "allOf": ErrorKind.COMBINATOR_FAILURE,
    "anyOf": ErrorKind.COMBINATOR_FAILURE,
    "oneOf": ErrorKind.COMBINATOR_FAILURE,
    "not": ErrorKind.COMBINATOR_FAILURE,
    "minimum": ErrorKind.RANGE_VIOLATION,
    "maximum": ErrorKind.RANGE_VIOLATION,
    "multipleOf": ErrorKind.DIVISIBILITY_VIOLATION,
    "divisibleBy": ErrorKind.DIVISIBILITY_VIOLATION,
    "minLength": ErrorKind.LENGTH_VIOLATION,
    "maxLength": ErrorKind.LENGTH_VIOLATION,
    "pattern": ErrorKind.PATTERN_MISMATCH,
    "minItems": ErrorKind.CARDINALITY_VIOLATION,
    "maxItems": ErrorKind.CARDINALITY_VIOLATION,
    "additionalItems": ErrorKind.CARDINALITY_VIOLATION,
    "minProperties": ErrorKind.CARDINALITY_VIOLATION,
    "maxProperties": ErrorKind.CARDINALITY_VIOLATION,
    "uniqueItems": ErrorKind.UNIQUENESS_VIOLATION,
    "required": ErrorKind.REQUIRED_PROPERTY_MISSING,
    "additionalProperties": ErrorKind.ADDITIONAL_PROPERTY_DISALLOWED,
    "dependencies": ErrorKind.DEPENDENCY_VIOLATION,
    "format": ErrorKind.FORMAT_VIOLATION,
}


@dataclass
class ValidationError:
    """
    A single validation failure.

    Attributes:
        path: Dot-separated value path (e.g. "root.address.zip", "root.items.2")
        property: Schema keyword that failed (e.g. "minLength", "required")
        message: Human-readable (translated) message
        errorcount: Number of identical errors collapsed into this one
    """

    path: str
    property: str
    message: str
    errorcount: int = 1

    @property
    def kind(self) -> ErrorKind:
        """Taxonomy tag for the failing keyword."""
        return _KIND_BY_PROPERTY.get(self.property, ErrorKind.CUSTOM_VALIDATOR_FAILURE)

    @property
    def key(self) -> Tuple[str, str, str]:
        """Identity used for deduplication."""
        return (self.path, self.property, self.message)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationError":
        """Build from a mapping with path/property/message (errorcount optional)."""
        return cls(
            path=str(data["path"]),
            property=str(data["property"]),
            message=str(data["message"]),
            errorcount=int(data.get("errorcount", 1)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "path": self.path,
            "property": self.property,
            "message": self.message,
            "errorcount": self.errorcount,
        }

    def __repr__(self) -> str:
        return (
            f"ValidationError(path={self.path!r}, property={self.property!r}, "
            f"message={self.message!r}, errorcount={self.errorcount})"
        )


ErrorLike = Union[ValidationError, Mapping[str, Any]]


def coerce_errors(errors: Iterable[ErrorLike]) -> List[ValidationError]:
    """Normalize custom validator output (records or plain dicts) to records."""
    result = []
    for error in errors or ():
        if isinstance(error, ValidationError):
            result.append(error)
        else:
            result.append(ValidationError.from_dict(error))
    return result


def deduplicate_errors(errors: Iterable[ValidationError]) -> List[ValidationError]:
    """
    Collapse errors sharing (path, property, message).

    The first occurrence is kept (as a copy) and its ``errorcount`` is
    incremented for each later duplicate. Order of first occurrences is
    preserved. Input records are not modified.

    Example:
        >>> e = ValidationError("root", "type", "Value must be of type string")
        >>> [d.errorcount for d in deduplicate_errors([e, e, e])]
        [3]
    """
    unique: Dict[Tuple[str, str, str], ValidationError] = {}
    for error in errors:
        first = unique.get(error.key)
        if first is None:
            unique[error.key] = replace(error, errorcount=1)
        else:
            first.errorcount += 1
    return list(unique.values())
