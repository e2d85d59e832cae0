"""
SchemaGuard - recursive JSON Schema validation for form editors.

Returns complete, ordered lists of structured validation errors for
values checked against draft 3 / draft 4 style schemas.
"""

__version__ = "0.4.0"

# Core exceptions (zero dependencies)
from .exceptions import (
    SchemaGuardError,
    SchemaConfigurationError,
    SchemaRecursionError,
    UnresolvableReferenceError,
    InvalidValueError,
)

from .settings import ValidatorSettings, NumericBackendName
from .numeric import (
    NumericBackend,
    FloatBackend,
    DecimalBackend,
    get_backend,
    register_backend,
    available_backends,
)
from .messages import MessageCatalog, default_translator
from .schema import RefResolver, extend_schema, check_schema

from .validation import (
    UNDEFINED,
    Validator,
    ValidationError,
    ErrorKind,
    FitScore,
    IPAddressValidator,
    validate,
    fit_test,
    best_fit,
    deduplicate_errors,
    register_validator,
    unregister_validator,
    registered_validators,
    clear_validators,
)

__all__ = [
    "__version__",
    # Exceptions
    "SchemaGuardError",
    "SchemaConfigurationError",
    "SchemaRecursionError",
    "UnresolvableReferenceError",
    "InvalidValueError",
    # Settings
    "ValidatorSettings",
    "NumericBackendName",
    # Numeric backends
    "NumericBackend",
    "FloatBackend",
    "DecimalBackend",
    "get_backend",
    "register_backend",
    "available_backends",
    # Messages
    "MessageCatalog",
    "default_translator",
    # Schema utilities
    "RefResolver",
    "extend_schema",
    "check_schema",
    # Validation
    "UNDEFINED",
    "Validator",
    "ValidationError",
    "ErrorKind",
    "FitScore",
    "IPAddressValidator",
    "validate",
    "fit_test",
    "best_fit",
    "deduplicate_errors",
    "register_validator",
    "unregister_validator",
    "registered_validators",
    "clear_validators",
]
