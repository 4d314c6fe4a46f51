from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Protocol

from entity_dedupe.errors import ConfigurationError
from entity_dedupe.models import Decision
from entity_dedupe.schema import EntityProfile, check_threshold


class Scored(Protocol):
    @property
    def score(self) -> float: ...

    @property
    def exact(self) -> bool: ...


class Classifier:
    """Maps raw scores to ``exact`` / ``potential`` / ``none``.

    Callers block insertion on ``exact``, ask a person on ``potential`` and
    carry on with ``none``.
    """

    def __init__(self, exact_threshold: float = math.inf, potential_threshold: float = 0.4) -> None:
        self.exact_threshold = check_threshold(exact_threshold, "exact_threshold", allow_infinite=True)
        self.potential_threshold = check_threshold(potential_threshold, "potential_threshold")
        if self.potential_threshold > self.exact_threshold:
            raise ConfigurationError("potential_threshold must not exceed exact_threshold")

    @classmethod
    def for_profile(cls, profile: EntityProfile) -> "Classifier":
        if profile.exact_threshold is not None:
            exact = profile.exact_threshold
        elif profile.identity_sets:
            exact = profile.max_score
        else:
            exact = math.inf
        return cls(exact_threshold=max(exact, profile.threshold), potential_threshold=profile.threshold)

    def classify(self, score: float) -> Decision:
        if score >= self.exact_threshold:
            return Decision.EXACT
        if score >= self.potential_threshold:
            return Decision.POTENTIAL
        return Decision.NONE

    def classify_match(self, match: Scored) -> Decision:
        if match.exact:
            return Decision.EXACT
        return self.classify(match.score)

    def has_exact(self, matches: Iterable[Scored]) -> bool:
        return any(self.classify_match(match) == Decision.EXACT for match in matches)

    def top_potential(self, matches: Iterable[Scored], limit: int = 5) -> list:
        potential = [match for match in matches if self.classify_match(match) == Decision.POTENTIAL]
        potential.sort(key=lambda match: -match.score)
        return potential[: max(limit, 0)]

    def partition(self, matches: Sequence[Scored]) -> dict[Decision, list]:
        buckets: dict[Decision, list] = {decision: [] for decision in Decision}
        for match in matches:
            buckets[self.classify_match(match)].append(match)
        return buckets
