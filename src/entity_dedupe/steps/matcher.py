from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from entity_dedupe.errors import ConfigurationError, ValidationError
from entity_dedupe.interfaces import FieldComparator
from entity_dedupe.models import EntityRecord, MatchResult, ScoreBreakdown
from entity_dedupe.schema import EntityProfile, FieldSpec
from entity_dedupe.steps.compare import WeightedFieldComparator, field_values_equal

logger = logging.getLogger(__name__)


class EntityMatcher:
    """Scores one record against another.

    Identity sets are checked first: when every field of a set is present on
    both sides and equal after normalization, the pair is an exact duplicate
    and scores the comparator's maximum, whatever the remaining fields say.
    """

    def __init__(
        self,
        comparator: FieldComparator,
        identity_sets: Sequence[Sequence[str]] = (),
    ) -> None:
        self._comparator = comparator
        by_name = {spec.name: spec for spec in comparator.fields}
        resolved: list[tuple[FieldSpec, ...]] = []
        for names in identity_sets:
            if not names:
                raise ConfigurationError("identity sets cannot be empty")
            missing = [name for name in names if name not in by_name]
            if missing:
                raise ConfigurationError(f"identity set references unknown fields {missing}")
            resolved.append(tuple(by_name[name] for name in names))
        self._identity_sets = tuple(resolved)

    @classmethod
    def from_profile(cls, profile: EntityProfile) -> "EntityMatcher":
        return cls(WeightedFieldComparator(profile.fields), profile.identity_sets)

    @property
    def max_score(self) -> float:
        return self._comparator.max_score

    def score(self, left: Mapping[str, str | None], right: Mapping[str, str | None]) -> ScoreBreakdown:
        for identity in self._identity_sets:
            if all(field_values_equal(spec, left.get(spec.name), right.get(spec.name)) for spec in identity):
                labels = " and ".join(spec.label for spec in identity)
                return ScoreBreakdown(score=self.max_score, reasons=[f"Same {labels}"], exact=True)
        return self._comparator.compare(left, right)

    def match_one(self, candidate: EntityRecord, reference: EntityRecord) -> MatchResult | None:
        """Compare a candidate with a stored record; ``None`` when nothing matched."""
        validate_records([candidate])
        validate_records([reference], require_id=True)
        return self._match(candidate, reference)

    def _match(self, candidate: EntityRecord, reference: EntityRecord) -> MatchResult | None:
        breakdown = self.score(candidate.attributes, reference.attributes)
        if breakdown.score == 0:
            return None
        return build_match(reference, breakdown)


def build_match(reference: EntityRecord, breakdown: ScoreBreakdown) -> MatchResult:
    return MatchResult(
        reference_id=reference.record_id or "",
        reference_label=reference.display_label,
        score=breakdown.score,
        reasons=breakdown.reasons,
        exact=breakdown.exact,
    )


def validate_records(records: Sequence[EntityRecord], require_id: bool = False) -> None:
    """Reject malformed records before any of them is processed."""
    for index, record in enumerate(records):
        if not isinstance(record, EntityRecord):
            raise ValidationError(f"record {index}: expected EntityRecord, got {type(record).__name__}")
        if require_id and (not isinstance(record.record_id, str) or not record.record_id):
            raise ValidationError(f"record {index}: stored records need a non-empty string id")
        if record.record_id is not None and not isinstance(record.record_id, str):
            raise ValidationError(f"record {index}: id must be a string")
        if record.label is not None and not isinstance(record.label, str):
            raise ValidationError(f"record {index}: label must be a string")
        if not isinstance(record.attributes, Mapping):
            raise ValidationError(f"record {index}: attributes must be a mapping")
        for name, value in record.attributes.items():
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    f"record {index}: field {name!r} must be a string or None, got {type(value).__name__}"
                )
    logger.debug("Validated %d records (require_id=%s)", len(records), require_id)
