"""
doc_manager - typed documentation store with semantic search.

Documents live under ``docs/<doc-type>/`` in a project root. The semantic
search subsystem chunks them, embeds each chunk, persists the vectors in
``.document-manager/embedding-index.json`` and ranks chunks against a query.

Example usage:
    >>> from doc_manager import SearchConfig, SemanticSearchEngine
    >>> engine = SemanticSearchEngine("/path/to/project", SearchConfig(provider="local"))
    >>> hits = engine.search("order cancellation", doc_type="api", limit=5)
"""

from .config import SearchConfig
from .errors import DocManagerError, IndexBuildError
from .fs import DOC_TYPES, DocType
from .search import (
    IndexBuildResult,
    SemanticSearchEngine,
    SemanticSearchResult,
    invalidate_index,
    is_semantic_search_enabled,
    semantic_search,
)

__all__ = [
    # Config
    "SearchConfig",
    # Errors
    "DocManagerError",
    "IndexBuildError",
    # Documents
    "DOC_TYPES",
    "DocType",
    # Search
    "IndexBuildResult",
    "SemanticSearchEngine",
    "SemanticSearchResult",
    "invalidate_index",
    "is_semantic_search_enabled",
    "semantic_search",
]
