"""
RAG API models and schemas.

Request/response schemas for ingestion, deletion, query and status
endpoints. Field names are camelCase on the wire.

Dependencies: pydantic
System role: RAG API contracts
"""

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from enterprise_rag.boundary.vdb import Match
from enterprise_rag.core.document_processing.models import (
    DocumentMetadata,
    RagDocument,
    UploadedFile,
)


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngestDocument(CamelModel):
    """Single pre-extracted document."""

    id: str | None = Field(default=None, description="Document ID, generated when omitted")
    text: str = Field(description="Document text")
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)

    def to_document(self) -> RagDocument:
        if self.id:
            return RagDocument(id=self.id, text=self.text, metadata=self.metadata)
        return RagDocument(text=self.text, metadata=self.metadata)


class IngestRequest(CamelModel):
    """Documents to ingest; a bare document body is accepted as well."""

    documents: list[IngestDocument] = Field(default_factory=list)
    reset: bool = False

    @model_validator(mode="before")
    @classmethod
    def wrap_single_document(cls, data: Any) -> Any:
        if isinstance(data, dict) and "documents" not in data and "text" in data:
            return {"documents": [data]}
        return data


class IngestFile(CamelModel):
    """Uploaded file with base64 content."""

    name: str = Field(min_length=1)
    data: str = Field(description="Base64 encoded file content")
    relative_path: str | None = None

    @field_validator("data")
    @classmethod
    def check_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("data must be base64 encoded") from e
        return value

    def to_uploaded_file(self) -> UploadedFile:
        return UploadedFile(
            name=self.name,
            data=base64.b64decode(self.data),
            relative_path=self.relative_path,
        )


class IngestFilesRequest(CamelModel):
    files: list[IngestFile] = Field(default_factory=list)
    reset: bool = False
    department: str | None = None


class IngestFolderRequest(CamelModel):
    folder_path: str | None = None
    reset: bool = False
    department: str | None = None
    extensions: list[str] | None = None


class IngestResponse(CamelModel):
    ok: bool = True
    documents: int = Field(description="Documents that produced chunks")
    chunks: int = Field(description="Chunks written")


class IngestFilesResponse(IngestResponse):
    files: int = Field(description="Files examined")
    skipped: int = Field(description="Files skipped")


class DeleteRequest(CamelModel):
    type: str = Field(description="file, category or reset")
    value: str | None = None


class DeleteResponse(CamelModel):
    ok: bool = True
    message: str


class QueryRequest(CamelModel):
    query: str
    department: str | None = None


class MatchResponse(CamelModel):
    """Search hit as returned to clients."""

    score: float
    text: str
    doc_id: str | None = None
    source: str | None = None
    title: str | None = None
    category: str | None = None
    chunk_index: int = 0

    @classmethod
    def from_match(cls, match: Match) -> "MatchResponse":
        payload = match.payload
        return cls(
            score=match.score,
            text=payload.text,
            doc_id=payload.doc_id,
            source=payload.source,
            title=payload.title,
            category=payload.category,
            chunk_index=payload.chunk_index,
        )


class QueryResponse(CamelModel):
    matches: list[MatchResponse]


class ContextRequest(QueryRequest):
    query: str | None = None
    system_prompt: str | None = None


class ContextResponse(CamelModel):
    context: str
    system_content: str
    matches: list[MatchResponse]


class StatusResponse(CamelModel):
    """Collection status for the management UI."""

    enabled: bool
    reachable: bool
    collection_exists: bool
    has_documents: bool
    points_count: int
    status: str | None = None
    sources: dict[str, list[str]] | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    error: str
    message: str
    files: int | None = None
    skipped: int | None = None
