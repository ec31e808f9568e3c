"""Indexing components for doc_manager."""

from .chunker import SmartChunker, TextChunk, chunk_text

__all__ = [
    "SmartChunker",
    "TextChunk",
    "chunk_text",
]
