from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from entity_dedupe.errors import ConfigurationError
from entity_dedupe.models import ScoreBreakdown
from entity_dedupe.schema import Comparison, FieldSpec
from entity_dedupe.steps.normalize import normalize, split_values
from entity_dedupe.steps.similarity import string_similarity

NEARLY_IDENTICAL = 0.95
SIMILAR = 0.80
SIMILAR_FACTOR = 0.7


class WeightedFieldComparator:
    """Field-by-field weighted scoring driven by a list of ``FieldSpec``.

    Exact fields score their full weight or nothing. Fuzzy fields use a two-tier
    bonus: near-identical values earn the full weight, merely similar values
    earn ``SIMILAR_FACTOR`` of it, anything below ``SIMILAR`` earns nothing.
    A field missing on either side never contributes.
    """

    def __init__(self, fields: Sequence[FieldSpec]) -> None:
        self._fields = tuple(fields)
        if not self._fields:
            raise ConfigurationError("comparator needs at least one field")

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return self._fields

    @property
    def max_score(self) -> float:
        return sum(spec.weight for spec in self._fields)

    def compare(self, left: Mapping[str, str | None], right: Mapping[str, str | None]) -> ScoreBreakdown:
        result = ScoreBreakdown()
        for spec in self._fields:
            contribution, reason = self._compare_field(spec, left.get(spec.name), right.get(spec.name))
            if contribution > 0:
                result.score += contribution
                result.reasons.append(reason)
        return result

    def _compare_field(self, spec: FieldSpec, left: str | None, right: str | None) -> tuple[float, str]:
        if not left or not right:
            return 0.0, ""

        if spec.comparison == Comparison.SET_OVERLAP:
            return _overlap(spec, split_values(left, spec.normalizer), split_values(right, spec.normalizer))

        left_value = normalize(left, spec.normalizer)
        right_value = normalize(right, spec.normalizer)
        if not left_value or not right_value:
            return 0.0, ""

        if spec.comparison == Comparison.EXACT_NORMALIZED:
            if left_value == right_value:
                return spec.weight, f"Same {spec.label}"
            return 0.0, ""

        similarity = string_similarity(left_value, right_value)
        if similarity >= NEARLY_IDENTICAL:
            return spec.weight, f"Nearly identical {spec.plural} ({percent(similarity)}%)"
        if similarity >= SIMILAR:
            return SIMILAR_FACTOR * spec.weight, f"Similar {spec.plural} ({percent(similarity)}%)"
        return 0.0, ""


def field_values_equal(spec: FieldSpec, left: str | None, right: str | None) -> bool:
    """Both present and equal once normalized; used for identity checks."""
    if not left or not right:
        return False
    if spec.comparison == Comparison.SET_OVERLAP:
        left_set = split_values(left, spec.normalizer)
        return bool(left_set) and left_set == split_values(right, spec.normalizer)
    left_value = normalize(left, spec.normalizer)
    return bool(left_value) and left_value == normalize(right, spec.normalizer)


def percent(similarity: float) -> int:
    # Half-up, so 0.875 reads as 88%.
    return int(math.floor(similarity * 100 + 0.5))


def _overlap(spec: FieldSpec, left: frozenset[str], right: frozenset[str]) -> tuple[float, str]:
    shared = left & right
    if not shared:
        return 0.0, ""
    ratio = len(shared) / len(left | right)
    return spec.weight * ratio, f"Shared {spec.plural} ({', '.join(sorted(shared))})"
