"""
Task modules for document processing pipeline.

Exports: TextExtractionTask, ChunkingTask, split_text, normalize_text
"""

from .chunking_task import ChunkingTask, normalize_text, split_text
from .extraction_task import SUPPORTED_EXTENSIONS, TextExtractionTask, normalize_extension

__all__ = [
    "ChunkingTask",
    "SUPPORTED_EXTENSIONS",
    "TextExtractionTask",
    "normalize_extension",
    "normalize_text",
    "split_text",
]
