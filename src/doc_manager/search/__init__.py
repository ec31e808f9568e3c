"""Semantic search over the document tree."""

from .ranker import SemanticSearchResult, cosine_similarity, rank_results
from .semantic import (
    IndexBuildResult,
    SemanticSearchEngine,
    invalidate_index,
    is_semantic_search_enabled,
    semantic_search,
)

__all__ = [
    "SemanticSearchResult",
    "cosine_similarity",
    "rank_results",
    "IndexBuildResult",
    "SemanticSearchEngine",
    "invalidate_index",
    "is_semantic_search_enabled",
    "semantic_search",
]
