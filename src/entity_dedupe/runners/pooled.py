from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, ProcessPoolExecutor

from entity_dedupe.errors import ConfigurationError
from entity_dedupe.interfaces import PairMatcher
from entity_dedupe.models import BatchResolutionResult, CrossMatch, EntityRecord, IntraBatchMatch
from entity_dedupe.runners.local import assemble, resolve_rows, validate_batch
from entity_dedupe.schema import EntityProfile, check_threshold
from entity_dedupe.steps.matcher import EntityMatcher

logger = logging.getLogger(__name__)


class PooledBatchResolver:
    """Spreads candidate rows over an executor.

    Output is identical to ``LocalBatchResolver``: chunks are contiguous and
    their results are concatenated in row order before the final sort.
    The matcher and records must be picklable when a process pool is used.
    """

    def __init__(
        self,
        matcher: PairMatcher,
        threshold: float = 0.4,
        max_workers: int | None = None,
        chunk_size: int = 64,
        executor_factory: Callable[..., Executor] = ProcessPoolExecutor,
    ) -> None:
        if chunk_size < 1:
            raise ConfigurationError("chunk_size must be at least 1")
        self._matcher = matcher
        self._threshold = check_threshold(threshold, "threshold")
        self._max_workers = max_workers
        self._chunk_size = chunk_size
        self._executor_factory = executor_factory

    @classmethod
    def from_profile(cls, profile: EntityProfile, threshold: float | None = None, **kwargs) -> "PooledBatchResolver":
        return cls(
            EntityMatcher.from_profile(profile),
            profile.threshold if threshold is None else threshold,
            **kwargs,
        )

    def resolve(
        self,
        candidates: Sequence[EntityRecord],
        references: Sequence[EntityRecord],
    ) -> BatchResolutionResult:
        validate_batch(candidates, references)
        if not candidates:
            return BatchResolutionResult()

        chunks = [
            range(start, min(start + self._chunk_size, len(candidates)))
            for start in range(0, len(candidates), self._chunk_size)
        ]
        logger.debug("Resolving %d candidates in %d chunks", len(candidates), len(chunks))

        cross: list[CrossMatch] = []
        intra: list[IntraBatchMatch] = []
        candidate_list = list(candidates)
        reference_list = list(references)
        with self._executor_factory(max_workers=self._max_workers) as executor:
            futures = [
                executor.submit(
                    resolve_rows,
                    self._matcher,
                    self._threshold,
                    candidate_list,
                    reference_list,
                    chunk,
                )
                for chunk in chunks
            ]
            for future in futures:
                chunk_cross, chunk_intra = future.result()
                cross.extend(chunk_cross)
                intra.extend(chunk_intra)

        result = assemble(cross, intra)
        logger.info(
            "Resolved batch: %d matches with stored records, %d within batch",
            len(result.cross_matches),
            len(result.intra_batch_matches),
        )
        return result
