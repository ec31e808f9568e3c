"""
Scoring and ranking helpers for semantic search results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

SNIPPET_LENGTH = 200
ELLIPSIS = "…"


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product of two unit vectors, clamped to [0, 1].

    Vectors of different length score 0 instead of raising.
    """
    if len(a) != len(b):
        return 0.0
    total = sum(x * y for x, y in zip(a, b))
    return max(0.0, min(1.0, float(total)))


def make_snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    if len(text) <= length:
        return text
    return text[:length] + ELLIPSIS


@dataclass(frozen=True)
class SemanticSearchResult:
    """A ranked chunk hit."""

    doc_type: str
    slug: str
    score: float
    snippet: str


def rank_results(
    results: list[SemanticSearchResult], *, limit: int
) -> list[SemanticSearchResult]:
    """Sort by descending score and apply limit.

    The sort is stable, so equal scores keep enumeration order.
    """
    ordered = sorted(results, key=lambda result: -result.score)
    return ordered[: max(limit, 0)]
