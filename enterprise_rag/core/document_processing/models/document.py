"""
Document models for ingestion.

RagDocument is the unit handed to the ingestion pipeline; UploadedFile and
LoadResult describe raw files before extraction.

Dependencies: pydantic
System role: Input contracts of the ingestion pipeline
"""

import uuid
from pathlib import PurePath

from pydantic import BaseModel, Field


def _new_document_id() -> str:
    return str(uuid.uuid4())


class DocumentMetadata(BaseModel):
    """Source metadata carried into every chunk payload."""

    source: str | None = Field(
        default=None,
        description="Source path or name, unique key for deletion and re-ingestion",
    )
    title: str | None = Field(default=None, description="Display title")
    category: str | None = Field(default=None, description="Department label")


class RagDocument(BaseModel):
    """Extracted document ready for chunking."""

    id: str = Field(default_factory=_new_document_id, description="Document identifier")
    text: str = Field(description="Extracted plain text")
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)


class UploadedFile(BaseModel):
    """Raw file submitted for ingestion."""

    name: str = Field(min_length=1, description="Original filename")
    data: bytes = Field(description="Raw file content")
    relative_path: str | None = Field(
        default=None,
        description="Path relative to the uploaded folder, used as source when present",
    )

    @property
    def source(self) -> str:
        return self.relative_path or self.name

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lower()


class LoadResult(BaseModel):
    """Documents produced from a batch of files plus skip accounting."""

    documents: list[RagDocument] = Field(default_factory=list)
    files_seen: int = 0
    files_skipped: int = 0
