"""
Pipeline result model for document ingestion.

Dependencies: pydantic
System role: Return type for IngestionPipeline.ingest()
"""

from pydantic import BaseModel, Field


class IngestionResult(BaseModel):
    """Outcome of one ingestion call."""

    documents_ingested: int = Field(default=0, description="Documents that produced chunks")
    chunks_written: int = Field(default=0, description="Points upserted into the collection")
