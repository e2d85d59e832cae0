"""
Heuristic value/schema affinity scoring.

``fit_test`` is independent of strict validation: it only looks at which
declared properties a value carries, weighting top-level properties far
above nested ones. It is used to rank candidate schemas, e.g. to choose
which ``oneOf`` branch an editor should display for a value.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

DEFAULT_WEIGHT = 10_000_000


@dataclass
class FitScore:
    """
    Accumulated fit of a value against a schema.

    Attributes:
        match: Weight of declared properties present in the value
        extra: Weight of declared properties missing from the value
    """

    match: float = 0
    extra: float = 0

    def to_dict(self) -> dict:
        return {"match": self.match, "extra": self.extra}


def fit_test(
    value: Any,
    schema: Mapping[str, Any],
    weight: float = DEFAULT_WEIGHT,
    resolver: Any = None,
) -> FitScore:
    """
    Score how well ``value`` fits ``schema``.

    For each declared property: a missing key adds ``weight`` to ``extra``;
    a present key adds ``weight`` to ``match``, and when both the property
    schema and the value member are objects, the nested score (at
    ``weight / 100``) is added to both accumulators.

    Args:
        value: Value to score (non-objects score zero)
        schema: Candidate schema
        weight: Weight of each property at this level
        resolver: Optional RefResolver used to expand ``$ref``s

    Returns:
        FitScore accumulator

    Example:
        >>> schema = {"properties": {"a": {}, "b": {}}}
        >>> fit_test({"a": 1}, schema, weight=100)
        FitScore(match=100, extra=100)
    """
    fit = FitScore()
    if not isinstance(value, Mapping) or not isinstance(schema, Mapping):
        return fit
    if resolver is not None and "$ref" in schema:
        schema = resolver.expand_refs(schema)

    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return fit

    for name, prop in properties.items():
        if name not in value:
            fit.extra += weight
            continue
        member = value[name]
        if (
            isinstance(member, Mapping)
            and isinstance(prop, Mapping)
            and isinstance(prop.get("properties"), Mapping)
        ):
            nested = fit_test(member, prop, weight / 100, resolver)
            fit.match += nested.match
            fit.extra += nested.extra
        fit.match += weight
    return fit


def best_fit(
    value: Any,
    candidates: Sequence[Mapping[str, Any]],
    resolver: Any = None,
) -> Optional[int]:
    """
    Return the index of the best-fitting candidate schema.

    Highest ``match`` wins, then lowest ``extra``; ties keep the earliest
    candidate. Returns None for an empty candidate list.
    """
    best_index: Optional[int] = None
    best_key = None
    for index, candidate in enumerate(candidates):
        score = fit_test(value, candidate, resolver=resolver)
        key = (score.match, -score.extra)
        if best_key is None or key > best_key:
            best_index, best_key = index, key
    return best_index
