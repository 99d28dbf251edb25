"""
Exception hierarchy for the enterprise RAG backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class EnterpriseRagException(Exception):
    """Base exception for all RAG backend errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(EnterpriseRagException):
    """Raised when the RAG subsystem is used while disabled or misconfigured."""

    pass


class IngestionDisabledError(ConfigurationError):
    """Raised when ingestion is requested while RAG is disabled."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("RAG is disabled. Set RAG_ENABLED=true.", details)


class ValidationError(EnterpriseRagException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NothingToIngestError(ValidationError):
    """Raised when every submitted file was skipped."""

    def __init__(self, files_seen: int, files_skipped: int) -> None:
        """
        Initialize nothing-to-ingest error.

        Args:
            files_seen: Number of files inspected
            files_skipped: Number of files skipped (unsupported, empty, unreadable)
        """
        self.files_seen = files_seen
        self.files_skipped = files_skipped
        super().__init__(
            "No documents to ingest.",
            details={"files": files_seen, "skipped": files_skipped},
        )


class ProviderError(EnterpriseRagException):
    """Raised when an external provider (embedding, vector store) fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Name of the failing provider
            status_code: HTTP status returned by the provider, if any
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class EmbeddingError(ProviderError):
    """Raised when embedding generation fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, provider="ollama", status_code=status_code, details=details)


class VectorStoreError(ProviderError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, search, delete, ...)
            status_code: HTTP status returned by the vector store, if any
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, provider="qdrant", status_code=status_code, details=details)


class CollectionDimensionMismatchError(VectorStoreError):
    """Raised when embeddings do not match the collection's vector size."""

    def __init__(self, collection: str, expected: int, actual: int) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            collection: Collection name
            expected: Vector size stored in the collection
            actual: Vector size of the incoming embeddings
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Collection '{collection}' stores {expected}-dimensional vectors, "
            f"got {actual}",
            operation="ensure_collection",
            details={"collection": collection, "expected": expected, "actual": actual},
        )


class DocumentProcessingError(EnterpriseRagException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: Name or ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when text extraction from a file fails."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            document_id: Name or ID of the document
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)
