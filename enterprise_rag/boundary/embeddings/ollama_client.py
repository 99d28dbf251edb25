"""
Ollama embedding client.

Converts text into vectors through the Ollama /api/embeddings endpoint.
One request per call, no retries: callers decide how a failure propagates.

Dependencies: httpx, enterprise_rag.configs, enterprise_rag.core.exceptions
System role: Embedding generation adapter
"""

import logging
from numbers import Real
from typing import Any

import httpx

from enterprise_rag.configs.ollama import OllamaSettings
from enterprise_rag.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class OllamaEmbeddingClient:
    """Embedding generator backed by a local Ollama runtime."""

    def __init__(
        self,
        settings: OllamaSettings,
        model: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the embedding client.

        Args:
            settings: Ollama connection settings
            model: Embedding model name (e.g. nomic-embed-text)
            client: Optional pre-built HTTP client (not closed by aclose)

        Raises:
            ValueError: When model is empty
        """
        if not model:
            raise ValueError("model cannot be empty")

        self.model = model
        self.embeddings_url = f"{settings.host}/api/embeddings"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.timeout_sec)

    async def __aenter__(self) -> "OllamaEmbeddingClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def embed(self, text: str) -> list[float]:
        """
        Generate the embedding for one text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: Endpoint unreachable, error status or missing vector
        """
        payload = {"model": self.model, "prompt": text}

        try:
            response = await self._client.post(self.embeddings_url, json=payload)
        except httpx.TimeoutException as e:
            raise EmbeddingError(f"Embedding request timed out: {self.embeddings_url}") from e
        except httpx.RequestError as e:
            raise EmbeddingError(f"Embedding endpoint unreachable: {e}") from e

        if response.is_error:
            raise EmbeddingError(
                f"Request failed ({response.status_code}): {response.text or self.embeddings_url}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EmbeddingError("Embedding response is not valid JSON.") from e

        embedding = data.get("embedding") if isinstance(data, dict) else None
        if (
            not isinstance(embedding, list)
            or not embedding
            or not all(isinstance(value, Real) and not isinstance(value, bool) for value in embedding)
        ):
            raise EmbeddingError(
                "Embedding response missing embedding vector.",
                details={"model": self.model},
            )

        return [float(value) for value in embedding]
