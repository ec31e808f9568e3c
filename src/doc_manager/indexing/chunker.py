"""
Chunking utilities for indexing document content.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CHUNK_SIZE = 600
DEFAULT_OVERLAP = 100

# Boundary search window around the raw chunk end.
_LOOKBEHIND = 80
_LOOKAHEAD = 20


@dataclass(frozen=True)
class TextChunk:
    """A content chunk with source offsets."""

    text: str
    position: int
    start: int
    end: int


def _refine_end(content: str, start: int, end: int) -> int:
    window_start = max(0, end - _LOOKBEHIND)
    window = content[window_start : end + _LOOKAHEAD]
    boundary = window.rfind("\n\n")
    if boundary == -1:
        boundary = window.rfind("\n")
    if boundary == -1:
        return end
    return max(start + 1, window_start + boundary)


def chunk_text(
    content: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[TextChunk]:
    """
    Split content into overlapping chunks, preferring paragraph then line breaks.

    Offsets index into ``content`` as given; chunk text is stripped and chunks
    that strip to nothing are dropped. Every step advances by at least one
    character, so any ``overlap`` terminates.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be > 0")
    if overlap < 0:
        raise ValueError("overlap must be >= 0")
    if not content.strip():
        return []

    chunks: list[TextChunk] = []
    total = len(content)
    start = 0
    while start < total:
        end = min(start + chunk_size, total)
        if end < total:
            end = _refine_end(content, start, end)

        text = content[start:end].strip()
        if text:
            chunks.append(TextChunk(text=text, position=len(chunks), start=start, end=end))

        # Only full-size chunks overlap into the next one.
        step_back = overlap if end - start >= chunk_size else 0
        start = max(start + 1, end - step_back)

    return chunks


class SmartChunker:
    """
    Paragraph-aware chunker with overlap.

    This implementation is char-based to keep it deterministic and lightweight.
    """

    def __init__(
        self, chunk_size: int = DEFAULT_CHUNK_SIZE, overlap: int = DEFAULT_OVERLAP
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if overlap < 0:
            raise ValueError("overlap must be >= 0")

        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk_text(self, text: str) -> list[TextChunk]:
        return chunk_text(text, self.chunk_size, self.overlap)
