from __future__ import annotations

from entity_dedupe.steps.normalize import normalize_text


def string_similarity(left: str, right: str) -> float:
    """Normalized Levenshtein similarity in ``[0, 1]``, over code points."""
    left = normalize_text(left)
    right = normalize_text(right)
    if left == right:
        return 1.0
    if not left or not right:
        return 0.0
    return 1.0 - levenshtein(left, right) / max(len(left), len(right))


def levenshtein(left: str, right: str) -> int:
    if left == right:
        return 0
    if len(left) < len(right):
        left, right = right, left
    if not right:
        return len(left)

    prev = list(range(len(right) + 1))
    for i, c1 in enumerate(left, start=1):
        curr = [i]
        for j, c2 in enumerate(right, start=1):
            cost = 0 if c1 == c2 else 1
            curr.append(min(curr[j - 1] + 1, prev[j] + 1, prev[j - 1] + cost))
        prev = curr
    return prev[-1]
