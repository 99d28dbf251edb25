"""
Vector database boundary layer.

Provides the Qdrant client and the schemas exchanged with it.

Dependencies: httpx, pydantic
System role: Vector store adapter for RAG ingestion and retrieval
"""

from enterprise_rag.boundary.vdb.qdrant_store import (
    UNCATEGORIZED,
    UPSERT_BATCH_SIZE,
    QdrantVectorStore,
)
from enterprise_rag.boundary.vdb.vector_schemas import (
    CollectionInfo,
    Match,
    PayloadFilter,
    Point,
    PointPayload,
)

__all__ = [
    "CollectionInfo",
    "Match",
    "PayloadFilter",
    "Point",
    "PointPayload",
    "QdrantVectorStore",
    "UNCATEGORIZED",
    "UPSERT_BATCH_SIZE",
]
