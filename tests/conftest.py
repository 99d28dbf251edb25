"""
Shared test fixtures and configuration for entire test suite.

Provides: settings, in-memory Qdrant/Ollama fakes, wired clients and services
Dependencies: pytest, httpx
System role: Test infrastructure and fixture management
"""

import httpx
import pytest

from enterprise_rag.application.services import RagService
from enterprise_rag.boundary.embeddings import OllamaEmbeddingClient
from enterprise_rag.boundary.vdb import QdrantVectorStore
from enterprise_rag.configs import Settings
from fakes import FakeOllama, FakeQdrant, build_service, build_settings


@pytest.fixture
def fake_qdrant() -> FakeQdrant:
    return FakeQdrant()


@pytest.fixture
def fake_ollama() -> FakeOllama:
    return FakeOllama()


@pytest.fixture
def settings() -> Settings:
    return build_settings()


@pytest.fixture
def disabled_settings() -> Settings:
    return build_settings(enabled=False)


@pytest.fixture
def vector_store(settings: Settings, fake_qdrant: FakeQdrant) -> QdrantVectorStore:
    return QdrantVectorStore(
        settings.rag,
        client=httpx.AsyncClient(transport=fake_qdrant.transport()),
    )


@pytest.fixture
def embedder(settings: Settings, fake_ollama: FakeOllama) -> OllamaEmbeddingClient:
    return OllamaEmbeddingClient(
        settings.ollama,
        model=settings.rag.embed_model,
        client=httpx.AsyncClient(transport=fake_ollama.transport()),
    )


@pytest.fixture
def rag_service(settings: Settings, fake_qdrant: FakeQdrant, fake_ollama: FakeOllama) -> RagService:
    return build_service(settings, fake_qdrant, fake_ollama)


@pytest.fixture
def disabled_service(
    disabled_settings: Settings,
    fake_qdrant: FakeQdrant,
    fake_ollama: FakeOllama,
) -> RagService:
    return build_service(disabled_settings, fake_qdrant, fake_ollama)
