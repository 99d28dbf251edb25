"""
Ingestion pipeline orchestrator.

Coordinates chunking, embedding and vector store upload for a batch of
extracted documents. Embeddings are requested one at a time in document
then chunk order; all points are buffered and upserted once at the end.

Dependencies: All task modules, enterprise_rag.boundary
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
import uuid

from enterprise_rag.boundary.embeddings import OllamaEmbeddingClient
from enterprise_rag.boundary.vdb import Point, PointPayload, QdrantVectorStore
from enterprise_rag.configs.rag import RagSettings
from enterprise_rag.core.exceptions import IngestionDisabledError

from .models import IngestionResult, RagDocument
from .tasks import ChunkingTask

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Orchestrate document ingestion: chunk -> embed -> upsert."""

    def __init__(
        self,
        settings: RagSettings,
        vector_store: QdrantVectorStore,
        embedder: OllamaEmbeddingClient,
        chunking_task: ChunkingTask | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            settings: RAG settings
            vector_store: Vector store client
            embedder: Embedding client
            chunking_task: Chunker (built from settings if None)
        """
        self._settings = settings
        self._vector_store = vector_store
        self._embedder = embedder
        self._chunking_task = chunking_task or ChunkingTask(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
        )

    def _require_enabled(self) -> None:
        if not self._settings.enabled:
            raise IngestionDisabledError()

    async def ingest(self, documents: list[RagDocument], reset: bool = False) -> IngestionResult:
        """
        Ingest documents into the vector store.

        The collection is created lazily from the first embedding's length.
        Documents whose text yields no chunks are skipped.

        Args:
            documents: Extracted documents
            reset: Drop the whole collection first

        Returns:
            IngestionResult: Documents that produced chunks and points written

        Raises:
            IngestionDisabledError: RAG is disabled
            ProviderError: Embedding or vector store failure (aborts the batch)
        """
        self._require_enabled()
        start_time = time.perf_counter()

        if reset:
            await self._vector_store.reset_collection()

        points: list[Point] = []
        documents_ingested = 0
        collection_ready = False

        for document in documents:
            chunks = self._chunking_task.chunk(document.text)
            if not chunks:
                continue
            documents_ingested += 1

            for chunk in chunks:
                embedding = await self._embedder.embed(chunk.text)
                if not collection_ready:
                    await self._vector_store.ensure_collection(len(embedding))
                    collection_ready = True

                points.append(
                    Point(
                        id=str(uuid.uuid4()),
                        vector=embedding,
                        payload=PointPayload(
                            text=chunk.text,
                            doc_id=document.id,
                            chunk_index=chunk.index,
                            source=document.metadata.source,
                            title=document.metadata.title,
                            category=document.metadata.category,
                        ),
                    )
                )

        if points:
            await self._vector_store.upsert_points(points)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Ingested documents",
            extra={
                "document_count": len(documents),
                "documents_ingested": documents_ingested,
                "chunk_count": len(points),
                "processing_time_ms": round(elapsed_ms, 2),
            },
        )

        return IngestionResult(documents_ingested=documents_ingested, chunks_written=len(points))

    async def reset_collection(self) -> None:
        """Drop every point in the collection."""
        await self._vector_store.reset_collection()

    async def delete_source(self, source: str) -> None:
        """Remove all chunks of one source (delete-before-reingest)."""
        await self._vector_store.delete_by_source(source)

    async def delete_category(self, category: str) -> None:
        """Remove all chunks of one department."""
        await self._vector_store.delete_by_category(category)
