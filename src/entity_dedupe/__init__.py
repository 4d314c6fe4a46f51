"""Fuzzy duplicate detection for guests, vendors and other entity records."""

from entity_dedupe.errors import ConfigurationError, DedupeError, ValidationError
from entity_dedupe.models import (
    BatchResolutionResult,
    CrossMatch,
    Decision,
    EntityRecord,
    IntraBatchMatch,
    MatchResult,
)
from entity_dedupe.policy import Classifier
from entity_dedupe.runners import LocalBatchResolver, PooledBatchResolver, resolve_batch
from entity_dedupe.schema import Comparison, EntityProfile, FieldSpec, Normalizer

__all__ = [
    "BatchResolutionResult",
    "Classifier",
    "Comparison",
    "ConfigurationError",
    "CrossMatch",
    "Decision",
    "DedupeError",
    "EntityProfile",
    "EntityRecord",
    "FieldSpec",
    "IntraBatchMatch",
    "LocalBatchResolver",
    "MatchResult",
    "Normalizer",
    "PooledBatchResolver",
    "ValidationError",
    "resolve_batch",
]
