"""
API error handling.

Maps domain exceptions to HTTP responses with a uniform
{"error", "message"} body.

Dependencies: fastapi, enterprise_rag.core.exceptions
System role: Exception to HTTP status translation
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from enterprise_rag.core.exceptions import (
    ConfigurationError,
    EnterpriseRagException,
    NothingToIngestError,
    ProviderError,
    ValidationError,
)
from enterprise_rag.models.rag import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def status_for(exc: EnterpriseRagException) -> int:
    """HTTP status code for a domain exception."""
    if isinstance(exc, (ConfigurationError, ValidationError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ProviderError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_exception_handler(request: Request, exc: EnterpriseRagException) -> JSONResponse:
    status_code = status_for(exc)
    extra = {"path": request.url.path, "error_type": type(exc).__name__, "error": str(exc)}
    if status_code >= 500:
        logger.error("Request failed", extra=extra)
    else:
        logger.warning("Request rejected", extra=extra)

    body = ErrorResponse(error=type(exc).__name__, message=exc.message)
    if isinstance(exc, NothingToIngestError):
        body.files = exc.files_seen
        body.skipped = exc.files_skipped
    return _error_response(status_code, body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(error="ValidationError", message="; ".join(messages) or "Invalid request"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(error="InternalServerError", message=str(exc) or "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EnterpriseRagException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
