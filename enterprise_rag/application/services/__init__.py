"""Application services."""

from .rag_service import DeleteType, IngestionReport, RagService, RagStatus

__all__ = ["DeleteType", "IngestionReport", "RagService", "RagStatus"]
