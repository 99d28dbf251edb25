"""
Document processing pipeline.

Extraction, chunking and ingestion of documents into the vector store.
"""

from .entrypoint import IngestionPipeline
from .file_loader import (
    DEFAULT_EXTENSIONS,
    collect_files,
    documents_from_files,
    documents_from_paths,
    path_source,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "IngestionPipeline",
    "collect_files",
    "documents_from_files",
    "documents_from_paths",
    "path_source",
]
