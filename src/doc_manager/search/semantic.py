"""
Vector-based semantic search engine.

Keeps a persisted embedding index of every document in the project, rebuilds
it when any document changed, embeds the query and ranks chunks by cosine
similarity.
"""

from __future__ import annotations

import logging
import os
import threading
import weakref
from dataclasses import dataclass
from typing import Any

from ..config import SearchConfig
from ..embeddings import EmbeddingProvider, resolve_embedding_provider
from ..errors import IndexBuildError
from ..fs import DocType, document_mtime, is_valid_doc_type, list_doc_files, read_document
from ..indexing import SmartChunker
from ..storage import EmbeddingIndex, IndexedChunk, IndexedDocument, IndexStore
from .ranker import SemanticSearchResult, cosine_similarity, make_snippet, rank_results

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
# Never equals a real st_mtime_ns, so placeholder entries are always stale.
UNREADABLE_MTIME = -1

# Entries drop out once no engine or caller holds the lock.
_root_locks: weakref.WeakValueDictionary[str, Any] = weakref.WeakValueDictionary()
_root_locks_guard = threading.Lock()


def _get_root_lock(project_root: str) -> Any:
    """Return the reentrant per-project-root lock, creating one if needed."""
    normalized = os.path.realpath(project_root)
    with _root_locks_guard:
        lock = _root_locks.get(normalized)
        if lock is None:
            lock = threading.RLock()
            _root_locks[normalized] = lock
        return lock


@dataclass(frozen=True)
class IndexBuildResult:
    """Summary output for an index build."""

    index: EmbeddingIndex
    indexed_documents: int
    skipped_documents: int
    chunks_written: int


class SemanticSearchEngine:
    """Embed a query and search the chunk embeddings of a project's documents."""

    def __init__(
        self,
        project_root: str,
        config: SearchConfig | None = None,
        *,
        provider: EmbeddingProvider | None = None,
        store: IndexStore | None = None,
        chunker: SmartChunker | None = None,
    ) -> None:
        self.project_root = project_root
        self.config = config or SearchConfig()
        self.provider = provider or resolve_embedding_provider(self.config)
        self.store = store or IndexStore(project_root)
        self.chunker = chunker or SmartChunker()
        self._lock = _get_root_lock(project_root)

    @property
    def enabled(self) -> bool:
        return self.provider is not None

    def search(
        self,
        query: str,
        *,
        doc_type: DocType | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SemanticSearchResult]:
        """Return the top *limit* chunks most similar to *query*."""
        if self.provider is None:
            return []
        if not query or not query.strip():
            raise ValueError("query must be a non-empty string")
        if doc_type is not None and not is_valid_doc_type(doc_type):
            raise ValueError(f"Unknown doc type: {doc_type}")
        if limit < 0:
            raise ValueError("limit must be >= 0")
        if limit == 0:
            return []

        index = self.get_or_build_index()
        query_embedding = self.provider.embed(query)

        scored: list[SemanticSearchResult] = []
        for doc in index.docs:
            if doc_type and doc.doc_type != doc_type:
                continue
            for chunk in doc.chunks:
                if not chunk.embedding:
                    continue
                scored.append(
                    SemanticSearchResult(
                        doc_type=doc.doc_type,
                        slug=doc.slug,
                        score=cosine_similarity(query_embedding, chunk.embedding),
                        snippet=make_snippet(chunk.text),
                    )
                )
        return rank_results(scored, limit=limit)

    def get_or_build_index(self) -> EmbeddingIndex:
        """Load the persisted index, rebuilding it if missing or stale."""
        with self._lock:
            index = self.store.load()
            if index is not None and self.store.is_stale(index):
                logger.info("Embedding index for %s is stale", self.project_root)
                self.store.delete()
                index = None
            if index is not None:
                return index
            return self.build_index().index

    def build_index(self) -> IndexBuildResult:
        """
        Index every document in the project and persist the result.

        The index always covers all doc types; filtering happens at search
        time. Nothing is saved if the build fails.
        """
        if self.provider is None:
            raise ValueError("Semantic search is disabled; no embedding provider")

        with self._lock:
            docs: list[IndexedDocument] = []
            skipped = 0
            chunks_written = 0

            for item in list_doc_files(self.project_root):
                try:
                    # stat before reading so a concurrent edit leaves the entry stale
                    mtime = document_mtime(item.path)
                    content = read_document(item.path)
                except (OSError, UnicodeDecodeError) as e:
                    if not self.config.skip_unreadable:
                        raise IndexBuildError(item.path, str(e)) from e
                    logger.warning("Skipping unreadable document %s: %s", item.path, e)
                    skipped += 1
                    # placeholder entry keeps the index stale until the file reads
                    docs.append(
                        IndexedDocument(
                            doc_type=item.doc_type,
                            slug=item.slug,
                            path=item.path,
                            mtime=UNREADABLE_MTIME,
                        )
                    )
                    continue

                chunks = self.chunker.chunk_text(content)
                embeddings = (
                    self.provider.embed_batch([chunk.text for chunk in chunks])
                    if chunks
                    else []
                )
                indexed_chunks = [
                    IndexedChunk(
                        text=chunk.text,
                        start=chunk.start,
                        end=chunk.end,
                        embedding=embeddings[i] if i < len(embeddings) else [],
                    )
                    for i, chunk in enumerate(chunks)
                ]
                docs.append(
                    IndexedDocument(
                        doc_type=item.doc_type,
                        slug=item.slug,
                        path=item.path,
                        mtime=mtime,
                        chunks=indexed_chunks,
                    )
                )
                chunks_written += len(indexed_chunks)

            index = EmbeddingIndex(docs=docs)
            self.store.save(index)
            logger.info(
                "Built embedding index for %s: %d documents, %d chunks, %d skipped",
                self.project_root,
                len(docs) - skipped,
                chunks_written,
                skipped,
            )
            return IndexBuildResult(
                index=index,
                indexed_documents=len(docs) - skipped,
                skipped_documents=skipped,
                chunks_written=chunks_written,
            )

    def invalidate(self) -> None:
        """Drop the persisted index; call after any document create/write/delete."""
        with self._lock:
            self.store.delete()


def semantic_search(
    project_root: str,
    query: str,
    *,
    doc_type: DocType | None = None,
    limit: int = DEFAULT_LIMIT,
    config: SearchConfig | None = None,
) -> list[SemanticSearchResult]:
    """Run a semantic search with configuration taken from the environment."""
    engine = SemanticSearchEngine(project_root, config or SearchConfig.from_env())
    return engine.search(query, doc_type=doc_type, limit=limit)


def invalidate_index(project_root: str) -> None:
    with _get_root_lock(project_root):
        IndexStore(project_root).delete()


def is_semantic_search_enabled(config: SearchConfig | None = None) -> bool:
    return (config or SearchConfig.from_env()).enabled
