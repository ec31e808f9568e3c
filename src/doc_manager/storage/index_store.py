"""
On-disk persistence for the embedding index.

The index is derived data: one JSON file per project root, rebuilt from the
document tree whenever it is missing, unreadable, from another schema version,
or stale.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

INDEX_DIR = ".document-manager"
INDEX_FILENAME = "embedding-index.json"
INDEX_VERSION = 1


class _IndexModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IndexedChunk(_IndexModel):
    """A chunk of a document together with its embedding."""

    text: str
    start: int
    end: int
    embedding: list[float] = Field(default_factory=list)


class IndexedDocument(_IndexModel):
    """All indexed chunks of one document, tagged with the file's mtime."""

    doc_type: str
    slug: str
    path: str
    mtime: int = Field(description="st_mtime_ns of the source file when indexed")
    chunks: list[IndexedChunk] = Field(default_factory=list)


class EmbeddingIndex(_IndexModel):
    """Persisted root of the index."""

    version: int = INDEX_VERSION
    docs: list[IndexedDocument] = Field(default_factory=list)


class IndexStore:
    """Load, save, delete and validate the index file for a project root."""

    def __init__(self, project_root: str) -> None:
        self.project_root = project_root
        self.path = os.path.join(project_root, INDEX_DIR, INDEX_FILENAME)

    def load(self) -> EmbeddingIndex | None:
        """Return the persisted index, or None if absent or not trustworthy."""
        if not os.path.isfile(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError):
            logger.warning("Discarding unreadable embedding index at %s", self.path)
            return None

        if not isinstance(raw, dict) or raw.get("version") != INDEX_VERSION:
            logger.info(
                "Ignoring embedding index at %s with unsupported version", self.path
            )
            return None

        try:
            return EmbeddingIndex.model_validate(raw)
        except ValidationError:
            logger.warning("Discarding malformed embedding index at %s", self.path)
            return None

    def save(self, index: EmbeddingIndex) -> None:
        """Write the index atomically (temp file in the same directory, then replace)."""
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        payload = index.model_dump_json(by_alias=True)

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{INDEX_FILENAME}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self) -> None:
        try:
            os.unlink(self.path)
        except FileNotFoundError:
            pass

    @staticmethod
    def is_stale(index: EmbeddingIndex) -> bool:
        """
        True if any indexed document is gone or its mtime changed.

        A single changed document invalidates the whole index.
        """
        for doc in index.docs:
            try:
                current = os.stat(doc.path).st_mtime_ns
            except OSError:
                return True
            if current != doc.mtime:
                return True
        return False
