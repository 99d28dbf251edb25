"""FastAPI dependency providers."""

from .dependencies import (
    ServiceContainer,
    get_rag_service,
    get_service_container,
)

__all__ = [
    "ServiceContainer",
    "get_rag_service",
    "get_service_container",
]
