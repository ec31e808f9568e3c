"""Shared fixtures for doc_manager tests."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Sequence

import numpy as np
import pytest
from numpy.random import default_rng


class HashEmbeddingProvider:
    """Deterministic provider: identical texts map to identical unit vectors."""

    def __init__(self, dim: int = 16) -> None:
        self.dim = dim
        self.batch_calls: list[list[str]] = []
        self.query_calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        rng = default_rng(int.from_bytes(digest[:8], "big", signed=False))
        vec = rng.standard_normal(self.dim)
        vec = vec / np.linalg.norm(vec)
        return [float(v) for v in vec]

    def embed(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self._vector(text)

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        self.batch_calls.append(list(texts))
        return [self._vector(text) for text in texts]


class FailingEmbeddingProvider(HashEmbeddingProvider):
    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        raise RuntimeError("embedding backend unavailable")


def write_doc(root: Path, doc_type: str, slug: str, content: str) -> Path:
    path = root / "docs" / doc_type / slug
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def provider() -> HashEmbeddingProvider:
    return HashEmbeddingProvider()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    write_doc(root, "api", "orders.md", "Orders API\n\n" + "x" * 1000)
    write_doc(
        root,
        "feature-specs",
        "checkout.md",
        "Checkout flow\n\nCustomers pay with card or invoice.",
    )
    write_doc(root, "jtbd", "empty.md", "   \n\n  ")
    return root


@pytest.fixture
def failing_provider() -> FailingEmbeddingProvider:
    return FailingEmbeddingProvider()


@pytest.fixture
def make_doc():
    """Factory writing ``docs/<doc_type>/<slug>`` under a root."""
    return write_doc
