"""
Observability module.

Provides logging configuration, correlation ID tracking and safe
structured logging helpers.
"""

from enterprise_rag.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from enterprise_rag.observability.logger import configure_logging

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
