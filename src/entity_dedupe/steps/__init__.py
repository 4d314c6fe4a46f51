from entity_dedupe.steps.compare import WeightedFieldComparator
from entity_dedupe.steps.matcher import EntityMatcher
from entity_dedupe.steps.normalize import normalize_email, normalize_phone, normalize_text
from entity_dedupe.steps.similarity import levenshtein, string_similarity

__all__ = [
    "WeightedFieldComparator",
    "EntityMatcher",
    "normalize_email",
    "normalize_phone",
    "normalize_text",
    "levenshtein",
    "string_similarity",
]
