"""
Qdrant vector store client.

Provides high-level interface over the Qdrant REST API: collection
lifecycle, batched upserts, filtered deletion and similarity search.
The client owns its HTTP connection pool; use it as an async context
manager or call aclose() when done.

Dependencies: httpx, enterprise_rag.configs, enterprise_rag.core.exceptions
System role: Vector store client for ingestion and retrieval
"""

import logging
from collections import defaultdict
from typing import Any

import httpx

from enterprise_rag.boundary.vdb.vector_schemas import (
    CollectionInfo,
    Match,
    PayloadFilter,
    Point,
    PointPayload,
)
from enterprise_rag.configs.rag import RagSettings
from enterprise_rag.core.exceptions import (
    CollectionDimensionMismatchError,
    ConfigurationError,
    VectorStoreError,
)
from enterprise_rag.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

UPSERT_BATCH_SIZE = 64
SCROLL_PAGE_SIZE = 256
UNCATEGORIZED = "uncategorized"


class QdrantVectorStore:
    """
    Qdrant client bound to a single collection.

    Points are stored with cosine distance. The first embedding written to a
    fresh collection fixes its vector size; later ensure_collection calls
    verify that size instead of trusting it.
    """

    def __init__(
        self,
        settings: RagSettings,
        client: httpx.AsyncClient | None = None,
        batch_size: int = UPSERT_BATCH_SIZE,
    ) -> None:
        """
        Initialize the vector store client.

        Args:
            settings: RAG settings (URL, collection, enabled flag, timeout)
            client: Optional pre-built HTTP client (not closed by aclose)
            batch_size: Points per upsert request
        """
        if batch_size < 1:
            raise ValueError("batch_size must be positive")

        self.config = settings
        self.batch_size = batch_size
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.request_timeout_sec)

    async def __aenter__(self) -> "QdrantVectorStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def collection_url(self) -> str:
        return f"{self.config.qdrant_url}/collections/{self.config.collection}"

    async def _request(
        self,
        method: str,
        url: str,
        operation: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        allow_404: bool = False,
    ) -> dict[str, Any] | None:
        """
        Send one request and decode the JSON body.

        Returns None for a 404 when allow_404 is set.

        Raises:
            VectorStoreError: On transport failure, error status or malformed body
        """
        try:
            response = await self._client.request(method, url, json=json, params=params)
        except httpx.TimeoutException as e:
            raise VectorStoreError(
                f"Qdrant request timed out: {url}",
                operation=operation,
            ) from e
        except httpx.RequestError as e:
            raise VectorStoreError(
                f"Qdrant unreachable: {e}",
                operation=operation,
                details={"url": url},
            ) from e

        if allow_404 and response.status_code == 404:
            return None

        if response.is_error:
            raise VectorStoreError(
                f"Qdrant error ({response.status_code}): {response.text or url}",
                operation=operation,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise VectorStoreError(
                "Qdrant returned a malformed response",
                operation=operation,
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise VectorStoreError(
                "Qdrant returned a malformed response",
                operation=operation,
                status_code=response.status_code,
            )
        return data

    async def get_collection(self) -> CollectionInfo | None:
        """
        Describe the collection.

        Returns:
            CollectionInfo, or None when the collection does not exist
        """
        data = await self._request("GET", self.collection_url, "get_collection", allow_404=True)
        if data is None:
            return None

        result = data.get("result") or {}
        params = (result.get("config") or {}).get("params") or {}
        vectors = params.get("vectors")
        vector_size = None
        if isinstance(vectors, dict) and isinstance(vectors.get("size"), int):
            vector_size = vectors["size"]

        return CollectionInfo(
            status=str(result.get("status") or "unknown"),
            points_count=result.get("points_count") or 0,
            vector_size=vector_size,
        )

    async def ensure_collection(self, vector_size: int) -> None:
        """
        Create the collection if absent, otherwise verify its vector size.

        Args:
            vector_size: Dimensionality of the embeddings about to be written

        Raises:
            CollectionDimensionMismatchError: Existing collection has another size
            VectorStoreError: If the store request fails
        """
        info = await self.get_collection()

        if info is None:
            await self._request(
                "PUT",
                self.collection_url,
                "create_collection",
                json={
                    "vectors": {"size": vector_size, "distance": "Cosine"},
                    "on_disk_payload": True,
                },
            )
            logger.info(
                "Created vector collection",
                extra={"collection": self.config.collection, "vector_size": vector_size},
            )
            return

        if info.vector_size is not None and info.vector_size != vector_size:
            raise CollectionDimensionMismatchError(
                collection=self.config.collection,
                expected=info.vector_size,
                actual=vector_size,
            )

    async def reset_collection(self) -> None:
        """
        Drop the collection and every point in it.

        An already absent collection counts as success.

        Raises:
            ConfigurationError: RAG is disabled
            VectorStoreError: If the store request fails
        """
        if not self.config.enabled:
            raise ConfigurationError("RAG is disabled. Set RAG_ENABLED=true.")

        await self._request("DELETE", self.collection_url, "reset_collection", allow_404=True)
        logger.info("Reset vector collection", extra={"collection": self.config.collection})

    async def upsert_points(self, points: list[Point]) -> None:
        """
        Write points in sequential batches.

        Each batch must succeed before the next is sent; earlier batches stay
        committed when a later one fails.

        Args:
            points: Points to write

        Raises:
            VectorStoreError: If a batch fails
        """
        url = f"{self.collection_url}/points"
        for start in range(0, len(points), self.batch_size):
            batch = points[start : start + self.batch_size]
            await self._request(
                "PUT",
                url,
                "upsert",
                json={"points": [point.to_qdrant() for point in batch]},
                params={"wait": "true"},
            )
            logger.debug(
                "Upserted point batch",
                extra={"offset": start, "batch_size": len(batch)},
            )

    async def delete_by_filter(self, key: str, value: str) -> None:
        """
        Delete every point whose payload field `key` equals `value`.

        A missing collection holds no points, so a 404 is not an error.

        Raises:
            VectorStoreError: If the store request fails
        """
        await self._request(
            "POST",
            f"{self.collection_url}/points/delete",
            "delete",
            json={"filter": PayloadFilter(key=key, value=value).to_qdrant()},
            params={"wait": "true"},
            allow_404=True,
        )
        logger.info("Deleted points by filter", extra={"key": key, "value": value})

    async def delete_by_source(self, source: str) -> None:
        await self.delete_by_filter("source", source)

    async def delete_by_category(self, category: str) -> None:
        await self.delete_by_filter("category", category)

    async def search(
        self,
        vector: list[float],
        limit: int,
        score_threshold: float | None = None,
        payload_filter: PayloadFilter | None = None,
    ) -> list[Match]:
        """
        Find the nearest points by cosine similarity.

        Args:
            vector: Query embedding
            limit: Maximum number of matches
            score_threshold: Minimum similarity (inclusive)
            payload_filter: Optional payload equality filter

        Returns:
            list[Match]: Matches by descending score, point id breaking ties

        Raises:
            VectorStoreError: If the store request fails
        """
        body: dict[str, Any] = {"vector": vector, "limit": limit, "with_payload": True}
        if score_threshold is not None:
            body["score_threshold"] = score_threshold
        if payload_filter is not None:
            body["filter"] = payload_filter.to_qdrant()

        data = await self._request(
            "POST",
            f"{self.collection_url}/points/search",
            "search",
            json=body,
            allow_404=True,
        )
        if data is None:
            return []

        hits = data.get("result")
        if not isinstance(hits, list):
            raise VectorStoreError("Qdrant search response has no result list", operation="search")

        matches = []
        for hit in hits:
            try:
                matches.append(
                    Match(
                        id=str(hit["id"]),
                        score=float(hit["score"]),
                        payload=PointPayload.model_validate(hit.get("payload") or {}),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                log_with_context(
                    logger,
                    logging.WARNING,
                    "Dropping malformed search hit",
                    hit=hit,
                    error=e,
                )

        matches.sort(key=lambda match: (-match.score, match.id))
        return matches

    async def list_sources(self) -> dict[str, list[str]]:
        """
        Enumerate unique sources grouped by category.

        Returns:
            dict: category -> sorted sources; points without category are
            grouped under "uncategorized"
        """
        grouped: dict[str, set[str]] = defaultdict(set)
        offset: Any = None

        while True:
            body: dict[str, Any] = {
                "limit": SCROLL_PAGE_SIZE,
                "with_payload": ["source", "category"],
                "with_vector": False,
            }
            if offset is not None:
                body["offset"] = offset

            data = await self._request(
                "POST",
                f"{self.collection_url}/points/scroll",
                "scroll",
                json=body,
                allow_404=True,
            )
            if data is None:
                break

            result = data.get("result") or {}
            for point in result.get("points") or []:
                payload = point.get("payload") or {}
                source = payload.get("source")
                if source:
                    grouped[payload.get("category") or UNCATEGORIZED].add(str(source))

            offset = result.get("next_page_offset")
            if offset is None:
                break

        return {category: sorted(grouped[category]) for category in sorted(grouped)}
