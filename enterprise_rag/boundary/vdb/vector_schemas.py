"""
Vector database schemas.

Pydantic models for vector operations (points, payloads, matches, filters).
Payloads returned by the store are validated here before reaching the
retrieval layer.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PointPayload(BaseModel):
    """
    Payload attached to each point.

    `source` and `category` are the filterable keys used for deletion and
    department-scoped search.
    """

    model_config = ConfigDict(extra="ignore")

    text: str = Field(default="", description="Chunk text")
    doc_id: str | None = Field(default=None, description="Parent document ID")
    chunk_index: int = Field(default=0, ge=0, description="Chunk position within the document")
    source: str | None = Field(default=None, description="Source path or name")
    title: str | None = Field(default=None, description="Document title")
    category: str | None = Field(default=None, description="Department label")


class Point(BaseModel):
    """Unit persisted in the vector store."""

    id: str = Field(description="Point UUID")
    vector: list[float] = Field(description="Embedding vector")
    payload: PointPayload

    def to_qdrant(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "vector": self.vector,
            "payload": self.payload.model_dump(),
        }


class Match(BaseModel):
    """Single similarity search hit."""

    id: str = Field(description="Point ID")
    score: float = Field(description="Cosine similarity, 1.0 = identical")
    payload: PointPayload


class PayloadFilter(BaseModel):
    """Equality filter on one payload key."""

    key: str
    value: str

    def to_qdrant(self) -> dict[str, Any]:
        return {"must": [{"key": self.key, "match": {"value": self.value}}]}


class CollectionInfo(BaseModel):
    """Subset of the collection description used by the pipeline."""

    status: str = "unknown"
    points_count: int = 0
    vector_size: int | None = None
