"""
Structured logging helpers for ingestion and retrieval.

Context values end up as LogRecord attributes, so they are flattened to
short strings first: file payloads become their size, document and chunk
lists become their length, and long texts are truncated.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from pathlib import PurePath
from typing import Any

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value as a bounded string.

    Args:
        value: Value to render
        max_length: Length above which the rendering is truncated

    Returns:
        str: Rendering safe to attach to a log record
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, (bytes, bytearray)):
            rendered = f"bytes({len(value)})"
        elif isinstance(value, PurePath):
            rendered = str(value)
        elif isinstance(value, str):
            rendered = value
        elif isinstance(value, (list, tuple, set)):
            rendered = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            rendered = f"dict({len(value)} keys)"
        else:
            rendered = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(rendered) > max_length:
        return rendered[:max_length] + f"... (truncated, {len(rendered)} total)"
    return rendered


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log message at level with every keyword attached as a record attribute."""
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.ERROR,
    **context: Any,
) -> None:
    """
    Log a caught exception with its traceback and context.

    The record carries error_type and error_msg next to the context keys,
    so degraded lookups can be found without parsing the traceback.

    Args:
        logger: Logger instance
        message: Log message
        exc: Caught exception
        level: Log level, ERROR unless the failure is expected
        **context: Extra record attributes
    """
    context.update(error_type=type(exc).__name__, error_msg=str(exc))
    if not logger.isEnabledFor(level):
        return
    extra = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, exc_info=exc, extra=extra)
