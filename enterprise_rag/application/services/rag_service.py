"""
RAG service orchestrator.

Coordinates ingestion requests (documents, uploaded files, folders),
deletion, querying and status reporting on top of the ingestion and
retrieval pipelines. Validation happens here, before any network call.

Dependencies: enterprise_rag.core, enterprise_rag.boundary, enterprise_rag.configs
System role: RAG request orchestration
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from enterprise_rag.boundary.embeddings import OllamaEmbeddingClient
from enterprise_rag.boundary.vdb import Match, QdrantVectorStore
from enterprise_rag.configs import Settings
from enterprise_rag.core.document_processing import (
    DEFAULT_EXTENSIONS,
    IngestionPipeline,
    collect_files,
    documents_from_files,
    documents_from_paths,
    path_source,
)
from enterprise_rag.core.document_processing.models import (
    IngestionResult,
    LoadResult,
    RagDocument,
    UploadedFile,
)
from enterprise_rag.core.document_processing.tasks import TextExtractionTask
from enterprise_rag.core.exceptions import (
    ConfigurationError,
    IngestionDisabledError,
    NothingToIngestError,
    ProviderError,
    ValidationError,
)
from enterprise_rag.core.retrieval import RetrievalResult, Retriever
from enterprise_rag.core.source_locks import SourceLockRegistry
from enterprise_rag.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class DeleteType(str, Enum):
    """Scope of a deletion request."""

    FILE = "file"
    CATEGORY = "category"
    RESET = "reset"


class IngestionReport(BaseModel):
    """Ingestion outcome including file accounting."""

    documents_ingested: int = 0
    chunks_written: int = 0
    files_seen: int = 0
    files_skipped: int = 0


class RagStatus(BaseModel):
    """Collection health for the management UI."""

    enabled: bool
    reachable: bool
    collection_exists: bool = False
    has_documents: bool = False
    points_count: int = 0
    status: str | None = None
    sources: dict[str, list[str]] | None = Field(
        default=None,
        description="Unique sources grouped by category",
    )
    error: str | None = None


class RagService:
    """
    RAG service orchestrator.

    Owns the vector store and embedding clients it is given; close it with
    aclose() or use it as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        vector_store: QdrantVectorStore,
        embedder: OllamaEmbeddingClient,
        pipeline: IngestionPipeline | None = None,
        retriever: Retriever | None = None,
        extractor: TextExtractionTask | None = None,
        source_locks: SourceLockRegistry | None = None,
    ) -> None:
        """
        Initialize RAG service.

        Args:
            settings: Application settings
            vector_store: Qdrant client
            embedder: Ollama embedding client
            pipeline: Optional IngestionPipeline (built from settings if None)
            retriever: Optional Retriever (built from settings if None)
            extractor: Optional TextExtractionTask
            source_locks: Optional lock registry shared between services
        """
        self.settings = settings
        self.config = settings.rag
        self.vector_store = vector_store
        self.embedder = embedder
        self.pipeline = pipeline or IngestionPipeline(self.config, vector_store, embedder)
        self.retriever = retriever or Retriever(self.config, vector_store, embedder)
        self.extractor = extractor or TextExtractionTask()
        self.source_locks = source_locks or SourceLockRegistry()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RagService":
        """Build a service with its own HTTP clients."""
        return cls(
            settings=settings,
            vector_store=QdrantVectorStore(settings.rag),
            embedder=OllamaEmbeddingClient(settings.ollama, model=settings.rag.embed_model),
        )

    async def __aenter__(self) -> "RagService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying HTTP clients."""
        await self.vector_store.aclose()
        await self.embedder.aclose()

    def _require_enabled(self) -> None:
        if not self.config.enabled:
            raise IngestionDisabledError()

    @staticmethod
    def _report(result: IngestionResult, loaded: LoadResult | None = None) -> IngestionReport:
        return IngestionReport(
            documents_ingested=result.documents_ingested,
            chunks_written=result.chunks_written,
            files_seen=loaded.files_seen if loaded else 0,
            files_skipped=loaded.files_skipped if loaded else 0,
        )

    async def _clear_sources(self, sources: list[str], reset: bool) -> None:
        """
        Reset the collection, or drop stale chunks of each source.

        A failed per-source delete is logged and ingestion goes on.
        """
        if reset:
            await self.pipeline.reset_collection()
            return

        for source in sources:
            try:
                await self.pipeline.delete_source(source)
            except ProviderError as e:
                log_exception_with_context(
                    logger,
                    "Failed to delete existing documents for source",
                    e,
                    level=logging.WARNING,
                    source=source,
                )

    async def ingest_documents(
        self,
        documents: list[RagDocument],
        reset: bool = False,
    ) -> IngestionReport:
        """
        Ingest already extracted documents.

        Args:
            documents: Documents with text and metadata
            reset: Drop the whole collection first

        Returns:
            IngestionReport: Documents and chunks written

        Raises:
            ValidationError: No documents
            IngestionDisabledError: RAG is disabled
            ProviderError: Embedding or vector store failure
        """
        if not any(doc.text.strip() for doc in documents):
            raise ValidationError("No documents to ingest.", field="documents")
        self._require_enabled()

        sources = [doc.metadata.source for doc in documents if doc.metadata.source]
        async with self.source_locks.hold(sources):
            result = await self.pipeline.ingest(documents, reset=reset)
        return self._report(result)

    async def ingest_files(
        self,
        files: list[UploadedFile],
        reset: bool = False,
        category: str | None = None,
    ) -> IngestionReport:
        """
        Ingest uploaded files, replacing earlier versions of the same sources.

        Args:
            files: Uploaded files
            reset: Drop the whole collection instead of per-source deletes
            category: Optional department for every file

        Returns:
            IngestionReport: Counts including seen and skipped files

        Raises:
            ValidationError: No files or a file above the size limit
            NothingToIngestError: Every file was skipped
            IngestionDisabledError: RAG is disabled
            ProviderError: Embedding or vector store failure
        """
        if not files:
            raise ValidationError("No files to ingest.", field="files")

        oversized = [file.name for file in files if len(file.data) > self.config.max_file_bytes]
        if oversized:
            raise ValidationError(
                f"Files exceed the {self.config.max_file_mb} MB limit: {', '.join(oversized)}",
                field="files",
                details={"oversized": oversized},
            )
        self._require_enabled()

        sources = [file.source for file in files]
        async with self.source_locks.hold(sources):
            await self._clear_sources(sources, reset)
            loaded = await documents_from_files(
                files,
                self.extractor,
                max_file_bytes=self.config.max_file_bytes,
                category=category,
            )
            if not loaded.documents:
                raise NothingToIngestError(loaded.files_seen, loaded.files_skipped)
            result = await self.pipeline.ingest(loaded.documents)

        return self._report(result, loaded)

    async def ingest_folder(
        self,
        folder_path: str | None = None,
        extensions: list[str] | None = None,
        reset: bool = False,
        department: str | None = None,
    ) -> IngestionReport:
        """
        Ingest every allowed file below a server-side folder.

        Args:
            folder_path: Folder to walk (RAG_DEFAULT_FOLDER when None)
            extensions: Extension allowlist (defaults to all supported)
            reset: Drop the whole collection instead of per-source deletes
            department: Optional department for every file

        Returns:
            IngestionReport: Counts including seen and skipped files

        Raises:
            ValidationError: Missing or invalid folder
            NothingToIngestError: No file produced text
            IngestionDisabledError: RAG is disabled
            ProviderError: Embedding or vector store failure
        """
        folder = folder_path or self.config.default_folder
        if not folder:
            raise ValidationError("folderPath is required.", field="folderPath")
        root = Path(folder)
        if not root.is_dir():
            raise ValidationError(f"Folder not found: {folder}", field="folderPath")
        self._require_enabled()

        paths = await asyncio.to_thread(collect_files, root, extensions or DEFAULT_EXTENSIONS)
        sources = [path_source(path) for path in paths]

        async with self.source_locks.hold(sources):
            await self._clear_sources(sources, reset)
            loaded = await documents_from_paths(
                paths,
                self.extractor,
                max_file_bytes=self.config.max_file_bytes,
                category=department,
            )
            if not loaded.documents:
                raise NothingToIngestError(loaded.files_seen, loaded.files_skipped)
            result = await self.pipeline.ingest(loaded.documents)

        log_with_context(
            logger,
            logging.INFO,
            "Folder ingested",
            folder=folder,
            department=department,
            files=loaded.files_seen,
            skipped=loaded.files_skipped,
        )
        return self._report(result, loaded)

    async def delete(self, delete_type: str, value: str | None = None) -> str:
        """
        Delete points by source, by category, or reset everything.

        Args:
            delete_type: "file", "category" or "reset"
            value: Source path or category name (not used for reset)

        Returns:
            str: Confirmation message

        Raises:
            ValidationError: Unknown type or missing value
            ConfigurationError: RAG is disabled
            ProviderError: Vector store failure
        """
        try:
            kind = DeleteType(delete_type)
        except ValueError:
            raise ValidationError("Invalid type provided", field="type")

        if kind is not DeleteType.RESET and not value:
            raise ValidationError(
                f"Value is required for {kind.value} deletion",
                field="value",
            )
        if not self.config.enabled:
            raise ConfigurationError("RAG is disabled. Set RAG_ENABLED=true.")

        if kind is DeleteType.RESET:
            await self.pipeline.reset_collection()
            return "Collection reset complete."

        if kind is DeleteType.FILE:
            async with self.source_locks.hold([value]):
                await self.pipeline.delete_source(value)
            return f'Documents for source "{value}" deleted.'

        await self.pipeline.delete_category(value)
        return f'Documents for category "{value}" deleted.'

    async def query(self, query: str, department: str | None = None) -> list[Match]:
        """Ranked matches for a query; errors propagate to the caller."""
        return await self.retriever.query_matches(query, department)

    async def get_context(
        self,
        query: str | None,
        department: str | None = None,
        system_prompt: str | None = None,
    ) -> RetrievalResult:
        """Context block and system message for a chat turn; never raises."""
        return await self.retriever.retrieve(query, department, system_prompt)

    async def status(self, include_sources: bool = False) -> RagStatus:
        """
        Report whether the collection exists and holds points.

        An unreachable vector store is reported, not raised.

        Args:
            include_sources: Also list unique sources grouped by category
        """
        try:
            info = await self.vector_store.get_collection()
            sources = None
            if include_sources:
                sources = await self.vector_store.list_sources() if info else {}
        except ProviderError as e:
            log_with_context(logger, logging.WARNING, "Vector store not reachable", error=e.message)
            return RagStatus(enabled=self.config.enabled, reachable=False, error=e.message)

        if info is None:
            return RagStatus(enabled=self.config.enabled, reachable=True, sources=sources)

        return RagStatus(
            enabled=self.config.enabled,
            reachable=True,
            collection_exists=True,
            has_documents=info.points_count > 0,
            points_count=info.points_count,
            status=info.status,
            sources=sources,
        )
