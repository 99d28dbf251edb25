"""
RAG pipeline configuration settings.

Manages the vector store connection, embedding model, retrieval limits
and chunking policy. Every knob maps to a RAG_* environment variable.

Dependencies: pydantic, pydantic_settings
System role: Ingestion and retrieval configuration
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RagSettings(BaseSettings):
    """RAG subsystem configuration (Qdrant vector store, Ollama embeddings)."""

    model_config = SettingsConfigDict(
        env_prefix="RAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(
        default=False,
        description="Master switch for ingestion and retrieval",
    )
    qdrant_url: str = Field(
        default="http://127.0.0.1:6333",
        description="Base URL of the Qdrant REST API",
    )
    collection: str = Field(
        default="chatbot_ollama",
        min_length=1,
        description="Qdrant collection holding document chunks",
    )
    embed_model: str = Field(
        default="nomic-embed-text",
        min_length=1,
        description="Ollama embedding model name",
    )

    top_k: int = Field(default=5, ge=1, le=100, description="Number of matches to retrieve")
    score_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for a match",
    )
    max_context_chars: int = Field(
        default=4000,
        ge=1,
        description="Character budget of the context block injected into the prompt",
    )

    chunk_size: int = Field(default=1000, ge=1, description="Chunk window size in characters")
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Overlap between consecutive chunks in characters",
    )

    max_file_mb: int = Field(default=50, ge=1, description="Largest ingestible file in MiB")
    default_folder: str | None = Field(
        default=None,
        description="Folder ingested when a folder request omits its path",
    )
    request_timeout_sec: float = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout for vector store calls",
    )

    @field_validator("qdrant_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_overlap(self) -> "RagSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self

    @property
    def max_file_bytes(self) -> int:
        """Size limit in bytes derived from max_file_mb."""
        return self.max_file_mb * 1024 * 1024
