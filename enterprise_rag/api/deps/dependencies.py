"""
Dependency injection container.

Factory functions for FastAPI dependencies. The container builds the RAG
service lazily and is closed by the application lifespan.

Dependencies: enterprise_rag.configs, enterprise_rag.application
System role: DI container for service injection
"""

from fastapi import Request

from enterprise_rag.application.services import RagService
from enterprise_rag.configs import Settings, get_settings


class ServiceContainer:
    """Container for service instances shared across requests."""

    def __init__(
        self,
        settings: Settings | None = None,
        rag_service: RagService | None = None,
    ) -> None:
        self._settings = settings or (rag_service.settings if rag_service else None)
        self._rag_service = rag_service

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def rag_service(self) -> RagService:
        """Get the RAG service, building its HTTP clients on first use."""
        if self._rag_service is None:
            self._rag_service = RagService.from_settings(self.settings)
        return self._rag_service

    async def aclose(self) -> None:
        """Close service clients and drop cached instances."""
        if self._rag_service is not None:
            await self._rag_service.aclose()
        self._rag_service = None


def get_service_container(request: Request) -> ServiceContainer:
    """Container stored on the application state by the lifespan."""
    return request.app.state.container


def get_rag_service(request: Request) -> RagService:
    """
    Get RAG service instance.

    Args:
        request: Incoming request (used to reach the app container)

    Returns:
        RagService: Shared RAG service
    """
    return get_service_container(request).rag_service
