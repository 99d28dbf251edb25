"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: enterprise_rag.application
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from enterprise_rag.api.deps import get_rag_service
from enterprise_rag.application.services import RagService


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    service: RagService = Depends(get_rag_service),
) -> HealthResponse:
    """Vector store health check; reports instead of failing."""
    rag_status = await service.status()
    if not rag_status.reachable:
        return HealthResponse(
            status="unhealthy",
            message=rag_status.error or "Vector store not reachable",
        )
    if not rag_status.collection_exists:
        return HealthResponse(status="healthy", message="Vector store accessible, no collection yet")
    return HealthResponse(
        status="healthy",
        message=f"Vector store accessible, {rag_status.points_count} points",
    )
