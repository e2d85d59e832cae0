"""
Numeric Backends for Range and Divisibility Checks.

The validator never compares numbers directly. ``minimum``/``maximum`` and
``multipleOf``/``divisibleBy`` delegate to a NumericBackend chosen when the
validator is constructed:

- FloatBackend: native binary floating point. Fast, but unsound near
  representable boundaries (``1.14 / 0.01 == 113.99999999999999``).
- DecimalBackend: exact decimal arithmetic. Floats are converted through
  their shortest ``repr`` so ``0.1`` becomes ``Decimal("0.1")``.

Example:
    >>> backend = get_backend("decimal")
    >>> backend.is_multiple(1.14, 0.01)
    True
    >>> get_backend("float").is_multiple(1.14, 0.01)
    False
"""

import math
from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import Dict, List, Optional, Protocol, Union

Number = Union[int, float, Decimal]


class NumericBackend(Protocol):
    """
    Protocol for the arithmetic used by numeric constraints.

    Implementations must be stateless so a single instance can be shared by
    concurrent validators.
    """

    @property
    def name(self) -> str:
        """Return the backend name ('float' or 'decimal')."""
        ...

    def compare(self, a: Number, b: Number) -> Optional[int]:
        """
        Return -1, 0 or 1 as ``a`` is less than, equal to or greater than ``b``.

        Returns None when the operands are unordered (NaN).
        """
        ...

    def mod(self, a: Number, b: Number) -> Number:
        """Return the remainder of ``a`` divided by ``b``."""
        ...

    def is_multiple(self, value: Number, divisor: Number) -> bool:
        """Return True if ``value`` is an exact multiple of ``divisor``."""
        ...


def _is_finite(value: Number) -> bool:
    return not isinstance(value, (float, Decimal)) or math.isfinite(value)


class FloatBackend:
    """Native floating point arithmetic."""

    name = "float"

    def compare(self, a: Number, b: Number) -> Optional[int]:
        # int, float and Decimal compare exactly; no float() conversion
        if a != a or b != b:
            return None
        if a < b:
            return -1
        if a > b:
            return 1
        return 0

    def mod(self, a: Number, b: Number) -> Number:
        if isinstance(a, int) and isinstance(b, int):
            return a % b
        return math.fmod(float(a), float(b))

    def is_multiple(self, value: Number, divisor: Number) -> bool:
        if isinstance(value, int) and isinstance(divisor, int):
            return value % divisor == 0
        # Floor-division equality; 1.14 / 0.01 floors to 113 and fails.
        try:
            quotient = float(value) / float(divisor)
        except OverflowError:
            if not (_is_finite(value) and _is_finite(divisor)):
                return False
            return Fraction(value) % Fraction(divisor) == 0
        if math.isinf(quotient) or math.isnan(quotient):
            return False
        return quotient == math.floor(quotient)


class DecimalBackend:
    """
    Exact decimal arithmetic backed by the standard ``decimal`` module.

    Attributes:
        precision: Significant digits used for the local decimal context
    """

    name = "decimal"

    def __init__(self, precision: int = 50):
        self.precision = precision

    @staticmethod
    def to_decimal(value: Number) -> Decimal:
        """Convert a number to Decimal through its string form."""
        if isinstance(value, Decimal):
            return value
        return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)

    def compare(self, a: Number, b: Number) -> Optional[int]:
        with localcontext() as ctx:
            ctx.prec = self.precision
            result = self.to_decimal(a).compare(self.to_decimal(b))
        if result.is_nan():
            return None
        return int(result)

    def mod(self, a: Number, b: Number) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = self.precision
            return self.to_decimal(a) % self.to_decimal(b)

    def is_multiple(self, value: Number, divisor: Number) -> bool:
        if isinstance(value, int) and isinstance(divisor, int):
            return value % divisor == 0
        try:
            return self.mod(value, divisor) == 0
        except InvalidOperation:
            return False


_BACKEND_REGISTRY: Dict[str, type] = {
    "float": FloatBackend,
    "decimal": DecimalBackend,
}


def get_backend(name: str = "float") -> NumericBackend:
    """
    Factory function to get a numeric backend by name.

    Args:
        name: The backend name ("float" or "decimal")

    Returns:
        A NumericBackend instance

    Raises:
        ValueError: If the name is not registered
    """
    if name not in _BACKEND_REGISTRY:
        valid = ", ".join(sorted(_BACKEND_REGISTRY.keys()))
        raise ValueError(
            f"Unknown numeric backend: '{name}'. Valid backends are: {valid}"
        )
    return _BACKEND_REGISTRY[name]()


def register_backend(name: str, backend_class: type) -> None:
    """
    Register a custom numeric backend implementation.

    Args:
        name: The backend name
        backend_class: Class implementing NumericBackend (no-arg constructor)
    """
    _BACKEND_REGISTRY[name] = backend_class


def available_backends() -> List[str]:
    """Get a sorted list of registered backend names."""
    return sorted(_BACKEND_REGISTRY.keys())
