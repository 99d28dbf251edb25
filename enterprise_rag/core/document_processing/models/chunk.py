"""
Chunk domain model for document processing pipeline.

Represents one window of a document's normalized text.

Dependencies: pydantic
System role: Data structure for chunks between chunking and embedding
"""

from pydantic import BaseModel, Field


class TextChunk(BaseModel):
    """Contiguous slice of normalized document text."""

    text: str = Field(description="Chunk text content")
    index: int = Field(ge=0, description="Zero-based position within the document")
