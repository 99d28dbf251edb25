"""
Retrieval orchestrator.

Embeds the query, searches the vector store with an optional department
filter and builds the context block. Context retrieval is best-effort:
failures degrade to an empty context so chat never blocks on RAG.

Dependencies: enterprise_rag.boundary, enterprise_rag.observability
System role: RAG retrieval business logic
"""

import logging

from pydantic import BaseModel, Field

from enterprise_rag.boundary.embeddings import OllamaEmbeddingClient
from enterprise_rag.boundary.vdb import Match, PayloadFilter, QdrantVectorStore
from enterprise_rag.configs.rag import RagSettings
from enterprise_rag.core.exceptions import ConfigurationError, ValidationError
from enterprise_rag.observability.log_utils import log_exception_with_context

from .context_builder import build_context, compose_system_prompt

logger = logging.getLogger(__name__)

ALL_DEPARTMENTS = "all"


class RetrievalResult(BaseModel):
    """Context block, the system message built from it and its matches."""

    context: str = ""
    system_content: str = ""
    matches: list[Match] = Field(default_factory=list)


class Retriever:
    """Query-time retrieval with department filtering."""

    def __init__(
        self,
        settings: RagSettings,
        vector_store: QdrantVectorStore,
        embedder: OllamaEmbeddingClient,
    ) -> None:
        self._settings = settings
        self._vector_store = vector_store
        self._embedder = embedder

    @staticmethod
    def department_filter(department: str | None) -> PayloadFilter | None:
        """Category filter for a department; None for no or "all" department."""
        trimmed = (department or "").strip()
        if not trimmed or trimmed.lower() == ALL_DEPARTMENTS:
            return None
        return PayloadFilter(key="category", value=trimmed)

    async def _search(self, query: str, department: str | None) -> list[Match]:
        embedding = await self._embedder.embed(query)
        return await self._vector_store.search(
            embedding,
            limit=self._settings.top_k,
            score_threshold=self._settings.score_threshold,
            payload_filter=self.department_filter(department),
        )

    async def query_matches(self, query: str, department: str | None = None) -> list[Match]:
        """
        Search for matches, surfacing every failure.

        Args:
            query: Query text
            department: Optional department, "all" disables filtering

        Returns:
            list[Match]: Ranked matches

        Raises:
            ConfigurationError: RAG is disabled
            ValidationError: Blank query
            ProviderError: Embedding or vector store failure
        """
        if not self._settings.enabled:
            raise ConfigurationError("RAG is disabled. Set RAG_ENABLED=true.")
        trimmed = (query or "").strip()
        if not trimmed:
            raise ValidationError("Query is required.", field="query")
        return await self._search(trimmed, department)

    async def retrieve(
        self,
        query: str | None,
        department: str | None = None,
        system_prompt: str | None = None,
    ) -> RetrievalResult:
        """
        Build the context block and system message for a chat turn.

        Never raises: a disabled subsystem, blank query or provider outage
        all return an empty context, and the system message then carries
        only the system prompt.

        Args:
            query: Query text
            department: Optional department, "all" disables filtering
            system_prompt: Chat system prompt placed after the context

        Returns:
            RetrievalResult: Context text, system message and ranked matches
        """
        empty = RetrievalResult(system_content=compose_system_prompt("", system_prompt))
        trimmed = (query or "").strip()
        if not self._settings.enabled or not trimmed:
            return empty

        try:
            matches = await self._search(trimmed, department)
        except Exception as e:
            log_exception_with_context(
                logger,
                "RAG lookup failed",
                e,
                department=department,
            )
            return empty

        context = build_context(matches, self._settings.max_context_chars)
        return RetrievalResult(
            context=context,
            system_content=compose_system_prompt(context, system_prompt),
            matches=matches,
        )
