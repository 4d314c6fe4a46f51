from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from entity_dedupe.interfaces import PairMatcher
from entity_dedupe.models import BatchResolutionResult, CrossMatch, EntityRecord, IntraBatchMatch
from entity_dedupe.schema import EntityProfile, check_threshold
from entity_dedupe.steps.matcher import EntityMatcher, build_match, validate_records

logger = logging.getLogger(__name__)


class LocalBatchResolver:
    """Single-process resolver: every candidate against every stored record, then every pair in the batch."""

    def __init__(self, matcher: PairMatcher, threshold: float = 0.4) -> None:
        self._matcher = matcher
        self._threshold = check_threshold(threshold, "threshold")

    @classmethod
    def from_profile(cls, profile: EntityProfile, threshold: float | None = None) -> "LocalBatchResolver":
        return cls(EntityMatcher.from_profile(profile), profile.threshold if threshold is None else threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def resolve(
        self,
        candidates: Sequence[EntityRecord],
        references: Sequence[EntityRecord],
    ) -> BatchResolutionResult:
        validate_batch(candidates, references)
        logger.debug("Resolving %d candidates against %d stored records", len(candidates), len(references))
        cross, intra = resolve_rows(self._matcher, self._threshold, candidates, references, range(len(candidates)))
        result = assemble(cross, intra)
        logger.info(
            "Resolved batch: %d matches with stored records, %d within batch",
            len(result.cross_matches),
            len(result.intra_batch_matches),
        )
        return result


def resolve_batch(
    candidates: Sequence[EntityRecord],
    references: Sequence[EntityRecord],
    profile: EntityProfile,
    threshold: float | None = None,
) -> BatchResolutionResult:
    return LocalBatchResolver.from_profile(profile, threshold=threshold).resolve(candidates, references)


def validate_batch(candidates: Sequence[EntityRecord], references: Sequence[EntityRecord]) -> None:
    validate_records(candidates)
    validate_records(references, require_id=True)


def resolve_rows(
    matcher: PairMatcher,
    threshold: float,
    candidates: Sequence[EntityRecord],
    references: Sequence[EntityRecord],
    rows: Iterable[int],
) -> tuple[list[CrossMatch], list[IntraBatchMatch]]:
    """Matches for the given candidate rows; pairs only look forward (``j > i``)."""
    cross: list[CrossMatch] = []
    intra: list[IntraBatchMatch] = []
    for i in rows:
        candidate = candidates[i]
        for reference in references:
            breakdown = matcher.score(candidate.attributes, reference.attributes)
            if breakdown.score > 0 and breakdown.score >= threshold:
                cross.append(CrossMatch(candidate_index=i, match=build_match(reference, breakdown)))

        for j in range(i + 1, len(candidates)):
            breakdown = matcher.score(candidate.attributes, candidates[j].attributes)
            if breakdown.score > 0 and breakdown.score >= threshold:
                intra.append(
                    IntraBatchMatch(
                        index1=i,
                        index2=j,
                        score=breakdown.score,
                        reasons=breakdown.reasons,
                        exact=breakdown.exact,
                    )
                )
    return cross, intra


def assemble(cross: list[CrossMatch], intra: list[IntraBatchMatch]) -> BatchResolutionResult:
    cross.sort(key=lambda item: (-item.match.score, item.candidate_index))
    intra.sort(key=lambda item: (-item.score, item.index1, item.index2))
    return BatchResolutionResult(cross_matches=cross, intra_batch_matches=intra)
