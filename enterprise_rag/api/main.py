"""
FastAPI application with assembled routers.

Initializes FastAPI app with the health and RAG routers and configures
the uvicorn server.

Dependencies: fastapi, enterprise_rag.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from enterprise_rag.api.deps import ServiceContainer
from enterprise_rag.api.error_handling import register_exception_handlers
from enterprise_rag.configs import get_settings
from enterprise_rag.observability import configure_logging
from enterprise_rag.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import health_router, rag_router

logger = logging.getLogger(__name__)


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        container: Optional pre-built service container (tests inject fakes here)

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    container = container or ServiceContainer()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.container = container
        logger.info(
            "RAG API starting",
            extra={
                "rag_enabled": container.settings.rag.enabled,
                "collection": container.settings.rag.collection,
            },
        )
        yield
        await container.aclose()
        logger.info("Service container closed")

    app = FastAPI(
        title="Enterprise Chat RAG API",
        description="Document ingestion and retrieval for the enterprise chat assistant",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(rag_router, prefix="/api/v1")

    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(ServiceContainer(settings)), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
