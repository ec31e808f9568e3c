"""
Embedding providers for vector-based semantic search.

Two implementations satisfy the ``EmbeddingProvider`` protocol: a local
sentence-transformers model and the Google GenAI embedding API. Both return
unit-length vectors so that a dot product equals cosine similarity.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence

import numpy as np
from google.genai import Client as GenAIClient

from .config import SearchConfig

logger = logging.getLogger(__name__)

_DEFAULT_LOCAL_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
_DEFAULT_GENAI_MODEL = "gemini-embedding-001"
_DEFAULT_DIM = 768
_DEFAULT_BATCH_SIZE = 50


class EmbeddingProvider(Protocol):
    """Contract the search engine relies on."""

    def embed(self, text: str) -> list[float]:
        """Embed a single text as a unit-length vector."""

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed many texts, one vector per input in input order."""


def normalize(vector: Any) -> list[float]:
    """Scale a vector to unit length; zero vectors are returned unchanged."""
    arr = np.asarray(vector, dtype=np.float64).reshape(-1)
    norm = float(np.linalg.norm(arr))
    if norm > 0:
        arr = arr / norm
    return [float(v) for v in arr]


class LocalEmbeddingProvider:
    """Generate embeddings with a locally cached sentence-transformers model."""

    def __init__(
        self,
        *,
        model_name: str | None = None,
        batch_size: int | None = None,
        model: Any | None = None,
    ) -> None:
        self.model_name = model_name or _DEFAULT_LOCAL_MODEL
        self.batch_size = batch_size or _DEFAULT_BATCH_SIZE
        self._model = model

    def _get_model(self) -> Any:
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            logger.info("Loading embedding model %s", self.model_name)
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed(self, text: str) -> list[float]:
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        model = self._get_model()
        vectors = model.encode(
            list(texts),
            batch_size=self.batch_size,
            convert_to_numpy=True,
            normalize_embeddings=True,
            show_progress_bar=False,
        )
        return [normalize(row) for row in vectors]


class GenAIEmbeddingProvider:
    """Generate text embeddings via Google GenAI."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        batch_size: int | None = None,
        client: Any | None = None,
    ) -> None:
        self.model = model or _DEFAULT_GENAI_MODEL
        self.dim = dim or _DEFAULT_DIM
        self.batch_size = batch_size or _DEFAULT_BATCH_SIZE

        if client is not None:
            self._client = client
        else:
            if api_key is None:
                raise ValueError(
                    "GOOGLE_API_KEY not found. "
                    "Provide api_key or set the environment variable."
                )
            self._client = GenAIClient(api_key=api_key)

    def _embed_content(self, contents: list[str], task_type: str) -> list[list[float]]:
        result = self._client.models.embed_content(
            model=self.model,
            contents=contents,
            config={
                "task_type": task_type,
                "output_dimensionality": self.dim,
            },
        )
        # Truncated dimensionalities come back un-normalized.
        return [normalize(emb.values) for emb in result.embeddings]

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed a list of texts in batches.

        Returns a list of embedding vectors in the same order as *texts*.
        """
        all_embeddings: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = list(texts[start : start + self.batch_size])
            all_embeddings.extend(self._embed_content(batch, "RETRIEVAL_DOCUMENT"))
        return all_embeddings

    def embed(self, text: str) -> list[float]:
        """Embed a single query text for retrieval."""
        return self._embed_content([text], "RETRIEVAL_QUERY")[0]


def resolve_embedding_provider(config: SearchConfig) -> EmbeddingProvider | None:
    """Return the provider selected by *config*, or None when disabled.

    A ``gemini`` provider without an API key counts as disabled.
    """
    if not config.enabled:
        if config.provider != "disabled":
            logger.warning(
                "Embedding provider %r is missing its API key; semantic search disabled",
                config.provider,
            )
        return None
    if config.provider == "local":
        return LocalEmbeddingProvider(
            model_name=config.model,
            batch_size=config.batch_size,
        )
    if config.provider == "gemini":
        return GenAIEmbeddingProvider(
            api_key=config.api_key,
            model=config.model,
            dim=config.dim,
            batch_size=config.batch_size,
        )
    return None
