"""Tests for RAG API endpoints."""

import base64

import pytest
from fastapi.testclient import TestClient

from enterprise_rag.api.deps import ServiceContainer
from enterprise_rag.api.main import create_app
from enterprise_rag.application.services import RagService
from fakes import FakeQdrant


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture
def client(rag_service: RagService):
    app = create_app(ServiceContainer(rag_service=rag_service))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def disabled_client(disabled_service: RagService):
    app = create_app(ServiceContainer(rag_service=disabled_service))
    with TestClient(app) as test_client:
        yield test_client


def _ingest_policy(client: TestClient, text: str) -> dict:
    response = client.post(
        "/api/v1/rag/ingest",
        json={
            "documents": [
                {
                    "text": text,
                    "metadata": {"source": "policy.pdf", "title": "Policy", "category": "HR"},
                }
            ]
        },
    )
    assert response.status_code == 200
    return response.json()


class TestIngestEndpoints:
    def test_ingest_documents(self, client: TestClient) -> None:
        body = _ingest_policy(client, "Employees receive twenty vacation days each year")
        assert body == {"ok": True, "documents": 1, "chunks": 1}

    def test_ingest_single_document_body(self, client: TestClient) -> None:
        response = client.post("/api/v1/rag/ingest", json={"id": "doc-1", "text": "Lockers on level two"})

        assert response.status_code == 200
        assert response.json()["chunks"] == 1

    def test_ingest_without_documents_is_400(self, client: TestClient) -> None:
        response = client.post("/api/v1/rag/ingest", json={"documents": []})

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_ingest_files(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/rag/ingest-files",
            json={
                "files": [
                    {"name": "a.txt", "data": _b64(b"Coffee machine cleaning rota"), "relativePath": "ops/a.txt"},
                    {"name": "b.exe", "data": _b64(b"MZ")},
                ],
                "department": "Ops",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "documents": 1, "chunks": 1, "files": 2, "skipped": 1}

    def test_ingest_files_nothing_to_ingest(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/rag/ingest-files",
            json={"files": [{"name": "b.exe", "data": _b64(b"MZ")}]},
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "NothingToIngestError",
            "message": "No documents to ingest.",
            "files": 1,
            "skipped": 1,
        }

    def test_ingest_files_invalid_base64(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/rag/ingest-files",
            json={"files": [{"name": "a.txt", "data": "***not base64***"}]},
        )

        assert response.status_code == 400
        assert "base64" in response.json()["message"]

    def test_ingest_folder(self, client: TestClient, tmp_path) -> None:
        (tmp_path / "notes.md").write_text("Quiet room booking rules")

        response = client.post(
            "/api/v1/rag/ingest-folder",
            json={"folderPath": str(tmp_path), "department": "Facilities", "extensions": [".md"]},
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "documents": 1, "chunks": 1, "files": 1, "skipped": 0}

    def test_ingest_folder_missing(self, client: TestClient, tmp_path) -> None:
        response = client.post("/api/v1/rag/ingest-folder", json={"folderPath": str(tmp_path / "x")})

        assert response.status_code == 400

    def test_disabled_is_400(self, disabled_client: TestClient) -> None:
        response = disabled_client.post("/api/v1/rag/ingest", json={"text": "hello"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "IngestionDisabledError",
            "message": "RAG is disabled. Set RAG_ENABLED=true.",
        }


class TestQueryEndpoints:
    def test_query_returns_camel_case_matches(self, client: TestClient) -> None:
        _ingest_policy(client, "Employees receive twenty vacation days each year")

        response = client.post("/api/v1/rag/query", json={"query": "vacation days", "department": "HR"})

        assert response.status_code == 200
        [match] = response.json()["matches"]
        assert set(match) == {"score", "text", "docId", "source", "title", "category", "chunkIndex"}
        assert match["source"] == "policy.pdf"
        assert match["chunkIndex"] == 0

    def test_query_blank_is_400(self, client: TestClient) -> None:
        response = client.post("/api/v1/rag/query", json={"query": " "})
        assert response.status_code == 400

    def test_query_provider_outage_is_502(self, client: TestClient, fake_qdrant: FakeQdrant) -> None:
        fake_qdrant.offline = True

        response = client.post("/api/v1/rag/query", json={"query": "vacation"})

        assert response.status_code == 502
        assert response.json()["error"] == "VectorStoreError"

    def test_context_degrades_on_outage(self, client: TestClient, fake_qdrant: FakeQdrant) -> None:
        fake_qdrant.offline = True

        response = client.post("/api/v1/rag/context", json={"query": "vacation"})

        assert response.status_code == 200
        assert response.json() == {"context": "", "systemContent": "", "matches": []}

    def test_context(self, client: TestClient) -> None:
        _ingest_policy(client, "Employees receive twenty vacation days each year")

        response = client.post("/api/v1/rag/context", json={"query": "vacation days"})

        assert response.json()["context"] == (
            "[Policy [HR]#0] Employees receive twenty vacation days each year"
        )

    def test_context_with_system_prompt(self, client: TestClient) -> None:
        _ingest_policy(client, "Employees receive twenty vacation days each year")

        response = client.post(
            "/api/v1/rag/context",
            json={"query": "vacation days", "systemPrompt": "You are the HR assistant."},
        )

        assert response.status_code == 200
        assert response.json()["systemContent"] == (
            "Context:\n[Policy [HR]#0] Employees receive twenty vacation days each year"
            "\n\nYou are the HR assistant."
        )

    def test_context_without_query_keeps_system_prompt(self, client: TestClient) -> None:
        response = client.post("/api/v1/rag/context", json={"systemPrompt": "Be concise."})

        assert response.status_code == 200
        assert response.json() == {"context": "", "systemContent": "Be concise.", "matches": []}

    def test_query_disabled_is_400(self, disabled_client: TestClient) -> None:
        response = disabled_client.post("/api/v1/rag/query", json={"query": "vacation"})
        assert response.status_code == 400


class TestDeleteAndStatus:
    def test_delete_then_status(self, client: TestClient) -> None:
        _ingest_policy(client, "Employees receive twenty vacation days each year")

        status = client.get("/api/v1/rag/status", params={"includeSources": "true"}).json()
        assert status["hasDocuments"] is True
        assert status["pointsCount"] == 1
        assert status["sources"] == {"HR": ["policy.pdf"]}

        response = client.post("/api/v1/rag/delete", json={"type": "file", "value": "policy.pdf"})
        assert response.status_code == 200
        assert response.json()["ok"] is True

        status = client.get("/api/v1/rag/status").json()
        assert status["pointsCount"] == 0
        assert status["sources"] is None

    def test_delete_invalid_type(self, client: TestClient) -> None:
        response = client.post("/api/v1/rag/delete", json={"type": "all"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid type provided"

    def test_status_unreachable(self, client: TestClient, fake_qdrant: FakeQdrant) -> None:
        fake_qdrant.offline = True

        response = client.get("/api/v1/rag/status")

        assert response.status_code == 200
        assert response.json()["reachable"] is False


class TestCorrelationHeader:
    def test_generated_when_absent(self, client: TestClient) -> None:
        response = client.get("/api/v1/rag/status")
        assert len(response.headers["X-Correlation-ID"]) == 32

    def test_echoed_when_present(self, client: TestClient) -> None:
        response = client.get("/api/v1/rag/status", headers={"X-Correlation-ID": "req-42"})
        assert response.headers["X-Correlation-ID"] == "req-42"
