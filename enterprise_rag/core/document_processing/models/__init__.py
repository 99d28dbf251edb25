"""
Models for document processing pipeline.

Exports: RagDocument, DocumentMetadata, TextChunk, IngestionResult, UploadedFile, LoadResult
"""

from .chunk import TextChunk
from .document import DocumentMetadata, LoadResult, RagDocument, UploadedFile
from .pipeline_result import IngestionResult

__all__ = [
    "DocumentMetadata",
    "IngestionResult",
    "LoadResult",
    "RagDocument",
    "TextChunk",
    "UploadedFile",
]
