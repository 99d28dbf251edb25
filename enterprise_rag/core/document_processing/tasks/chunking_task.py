"""
Text chunking task using fixed-size overlapping windows.

Collapses whitespace, then slides a character window over the text so that
consecutive chunks share exactly `chunk_overlap` characters.

Dependencies: re, enterprise_rag.core.document_processing.models
System role: Second stage of document ingestion pipeline
"""

import re

from ..models import TextChunk

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def _validate(chunk_size: int, chunk_overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if chunk_overlap < 0:
        raise ValueError(f"chunk_overlap cannot be negative, got {chunk_overlap}")
    if chunk_overlap >= chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
        )


def split_text(text: str, chunk_size: int, chunk_overlap: int) -> list[TextChunk]:
    """
    Split text into overlapping windows.

    Args:
        text: Raw document text
        chunk_size: Window length in characters
        chunk_overlap: Characters shared by consecutive windows

    Returns:
        list[TextChunk]: Chunks in order; empty when text is blank

    Raises:
        ValueError: When chunk_overlap >= chunk_size or sizes are out of range
    """
    _validate(chunk_size, chunk_overlap)

    normalized = normalize_text(text)
    chunks: list[TextChunk] = []
    start = 0
    while start < len(normalized):
        end = min(start + chunk_size, len(normalized))
        chunks.append(TextChunk(text=normalized[start:end], index=len(chunks)))
        if end >= len(normalized):
            break
        start = max(0, end - chunk_overlap)
    return chunks


class ChunkingTask:
    """Split document text into fixed-size overlapping chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with window configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValueError: When the configuration cannot make progress
        """
        _validate(chunk_size, chunk_overlap)
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def chunk(self, text: str) -> list[TextChunk]:
        """
        Split text into chunks.

        Args:
            text: Document text

        Returns:
            list[TextChunk]: Ordered chunks, empty for blank text
        """
        return split_text(text, self.chunk_size, self.chunk_overlap)
