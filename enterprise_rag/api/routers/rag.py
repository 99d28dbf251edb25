"""
RAG API endpoints.

Routes:
- POST /rag/ingest - Ingest pre-extracted documents
- POST /rag/ingest-files - Ingest base64 uploaded files
- POST /rag/ingest-folder - Ingest a server-side folder
- POST /rag/delete - Delete by source, by category, or reset
- POST /rag/query - Ranked matches for a query
- POST /rag/context - Context block for a chat turn
- GET /rag/status - Collection status

Dependencies: enterprise_rag.application, enterprise_rag.models
System role: RAG HTTP API
"""

from fastapi import APIRouter, Depends, Query

from enterprise_rag.api.deps import get_rag_service
from enterprise_rag.application.services import IngestionReport, RagService
from enterprise_rag.models.rag import (
    ContextRequest,
    ContextResponse,
    DeleteRequest,
    DeleteResponse,
    IngestFilesRequest,
    IngestFilesResponse,
    IngestFolderRequest,
    IngestRequest,
    IngestResponse,
    MatchResponse,
    QueryRequest,
    QueryResponse,
    StatusResponse,
)

router = APIRouter(prefix="/rag", tags=["rag"])


def _files_response(report: IngestionReport) -> IngestFilesResponse:
    return IngestFilesResponse(
        documents=report.documents_ingested,
        chunks=report.chunks_written,
        files=report.files_seen,
        skipped=report.files_skipped,
    )


@router.post("/ingest", response_model=IngestResponse)
async def ingest(
    request: IngestRequest,
    service: RagService = Depends(get_rag_service),
) -> IngestResponse:
    """Chunk, embed and store pre-extracted documents."""
    report = await service.ingest_documents(
        [item.to_document() for item in request.documents],
        reset=request.reset,
    )
    return IngestResponse(documents=report.documents_ingested, chunks=report.chunks_written)


@router.post("/ingest-files", response_model=IngestFilesResponse)
async def ingest_files(
    request: IngestFilesRequest,
    service: RagService = Depends(get_rag_service),
) -> IngestFilesResponse:
    """
    Ingest uploaded files.

    Each file replaces earlier chunks of the same source unless reset
    drops the whole collection first.
    """
    report = await service.ingest_files(
        [item.to_uploaded_file() for item in request.files],
        reset=request.reset,
        category=request.department,
    )
    return _files_response(report)


@router.post("/ingest-folder", response_model=IngestFilesResponse)
async def ingest_folder(
    request: IngestFolderRequest,
    service: RagService = Depends(get_rag_service),
) -> IngestFilesResponse:
    """Ingest every supported file below a folder on the server."""
    report = await service.ingest_folder(
        folder_path=request.folder_path,
        extensions=request.extensions,
        reset=request.reset,
        department=request.department,
    )
    return _files_response(report)


@router.post("/delete", response_model=DeleteResponse)
async def delete(
    request: DeleteRequest,
    service: RagService = Depends(get_rag_service),
) -> DeleteResponse:
    message = await service.delete(request.type, request.value)
    return DeleteResponse(message=message)


@router.post("/query", response_model=QueryResponse)
async def query(
    request: QueryRequest,
    service: RagService = Depends(get_rag_service),
) -> QueryResponse:
    """Ranked matches; provider failures surface as 502."""
    matches = await service.query(request.query, request.department)
    return QueryResponse(matches=[MatchResponse.from_match(match) for match in matches])


@router.post("/context", response_model=ContextResponse)
async def context(
    request: ContextRequest,
    service: RagService = Depends(get_rag_service),
) -> ContextResponse:
    """
    Context block and system message for a chat turn.

    The context is empty when RAG is unavailable; systemContent then holds
    only the system prompt.
    """
    result = await service.get_context(request.query, request.department, request.system_prompt)
    return ContextResponse(
        context=result.context,
        system_content=result.system_content,
        matches=[MatchResponse.from_match(match) for match in result.matches],
    )


@router.get("/status", response_model=StatusResponse)
async def rag_status(
    include_sources: bool = Query(default=False, alias="includeSources"),
    service: RagService = Depends(get_rag_service),
) -> StatusResponse:
    result = await service.status(include_sources=include_sources)
    return StatusResponse.model_validate(result.model_dump())
