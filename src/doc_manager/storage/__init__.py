"""Persistence for the embedding index."""

from .index_store import (
    INDEX_VERSION,
    EmbeddingIndex,
    IndexedChunk,
    IndexedDocument,
    IndexStore,
)

__all__ = [
    "INDEX_VERSION",
    "EmbeddingIndex",
    "IndexedChunk",
    "IndexedDocument",
    "IndexStore",
]
