from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from entity_dedupe.models import BatchResolutionResult, EntityRecord, MatchResult, ScoreBreakdown
from entity_dedupe.schema import FieldSpec


class FieldComparator(Protocol):
    """Step 1: weighted field-by-field score for two attribute mappings."""

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        ...

    @property
    def max_score(self) -> float:
        ...

    def compare(self, left: Mapping[str, str | None], right: Mapping[str, str | None]) -> ScoreBreakdown:
        ...


class PairMatcher(Protocol):
    """Step 2: score a pair of records, including any exact-identity shortcut."""

    def score(self, left: Mapping[str, str | None], right: Mapping[str, str | None]) -> ScoreBreakdown:
        ...

    def match_one(self, candidate: EntityRecord, reference: EntityRecord) -> MatchResult | None:
        ...


class BatchResolver(Protocol):
    """Step 3: match a batch against stored records and against itself."""

    def resolve(
        self,
        candidates: Sequence[EntityRecord],
        references: Sequence[EntityRecord],
    ) -> BatchResolutionResult:
        ...
