from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any, Mapping


class Decision(StrEnum):
    EXACT = "exact"
    POTENTIAL = "potential"
    NONE = "none"


@dataclass(slots=True)
class EntityRecord:
    """A candidate or stored record: field name -> optional string value."""

    record_id: str | None
    attributes: Mapping[str, str | None]
    label: str | None = None

    @property
    def display_label(self) -> str:
        return self.label or self.record_id or ""


@dataclass(slots=True)
class ScoreBreakdown:
    """Weighted score for one pair of records, with the reasons that produced it."""

    score: float = 0.0
    reasons: list[str] = field(default_factory=list)
    exact: bool = False


@dataclass(slots=True)
class MatchResult:
    """A candidate matched against one stored record."""

    reference_id: str
    reference_label: str
    score: float
    reasons: list[str]
    exact: bool = False

    @property
    def confidence(self) -> float:
        return min(self.score, 1.0)


@dataclass(slots=True)
class CrossMatch:
    candidate_index: int
    match: MatchResult

    @property
    def score(self) -> float:
        return self.match.score

    @property
    def exact(self) -> bool:
        return self.match.exact


@dataclass(slots=True)
class IntraBatchMatch:
    """Two records of the same incoming batch that look like one entity."""

    index1: int
    index2: int
    score: float
    reasons: list[str]
    exact: bool = False

    @property
    def confidence(self) -> float:
        return min(self.score, 1.0)


@dataclass(slots=True)
class BatchResolutionResult:
    cross_matches: list[CrossMatch] = field(default_factory=list)
    intra_batch_matches: list[IntraBatchMatch] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.cross_matches and not self.intra_batch_matches

    def to_dict(self) -> dict[str, Any]:
        return {
            "duplicates_with_existing": [
                {
                    "candidate_index": cross.candidate_index,
                    **asdict(cross.match),
                    "confidence": cross.match.confidence,
                }
                for cross in self.cross_matches
            ],
            "duplicates_in_batch": [
                {**asdict(pair), "confidence": pair.confidence} for pair in self.intra_batch_matches
            ],
        }
