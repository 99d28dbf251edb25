"""
File loading for ingestion requests.

Turns uploaded files or a folder on disk into RagDocuments. Unsupported,
oversized, empty and unreadable files are counted as skipped; they never
fail the batch.

Dependencies: pathlib, asyncio, enterprise_rag.core.document_processing
System role: Raw file intake ahead of the ingestion pipeline
"""

import asyncio
import logging
from pathlib import Path, PurePath
from typing import Iterable

from enterprise_rag.core.exceptions import ParsingError
from enterprise_rag.observability.log_utils import log_with_context

from .models import DocumentMetadata, LoadResult, RagDocument, UploadedFile
from .tasks import SUPPORTED_EXTENSIONS, TextExtractionTask, normalize_extension

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".pdf", ".xlsx", ".xls", ".txt", ".md", ".markdown")


def _build_document(
    text: str,
    source: str,
    title: str,
    category: str | None,
) -> RagDocument | None:
    trimmed = text.strip()
    if not trimmed:
        return None
    return RagDocument(
        text=trimmed,
        metadata=DocumentMetadata(source=source, title=title, category=category),
    )


async def _extract(
    extractor: TextExtractionTask,
    data: bytes,
    extension: str,
    source: str,
) -> str | None:
    """Run extraction off the event loop; None when the file is unreadable."""
    try:
        return await asyncio.to_thread(extractor.extract, data, extension, source)
    except ParsingError as e:
        log_with_context(logger, logging.WARNING, "Skipping unreadable file", source=source, error=e)
        return None


async def documents_from_files(
    files: Iterable[UploadedFile],
    extractor: TextExtractionTask,
    max_file_bytes: int,
    category: str | None = None,
) -> LoadResult:
    """
    Convert uploaded files into documents.

    Args:
        files: Uploaded files
        extractor: Text extraction task
        max_file_bytes: Files above this size are skipped
        category: Optional department applied to every document

    Returns:
        LoadResult: Documents plus seen/skipped counts
    """
    result = LoadResult()

    for file in files:
        result.files_seen += 1

        if len(file.data) > max_file_bytes or file.extension not in SUPPORTED_EXTENSIONS:
            result.files_skipped += 1
            continue

        text = await _extract(extractor, file.data, file.extension, file.source)
        document = _build_document(
            text or "",
            source=file.source,
            title=PurePath(file.name).name,
            category=category,
        )
        if document is None:
            result.files_skipped += 1
            continue
        result.documents.append(document)

    return result


def path_source(path: Path) -> str:
    """Source key of a file on disk: its absolute path."""
    return str(path.resolve())


def collect_files(root: Path, extensions: Iterable[str]) -> list[Path]:
    """
    Recursively list files under root whose extension is allowed.

    Args:
        root: Folder to walk
        extensions: Allowed extensions, case-insensitive

    Returns:
        list[Path]: Matching files, sorted
    """
    allowed = {normalize_extension(ext) for ext in extensions}
    return sorted(
        path for path in root.rglob("*") if path.is_file() and path.suffix.lower() in allowed
    )


async def documents_from_paths(
    paths: list[Path],
    extractor: TextExtractionTask,
    max_file_bytes: int,
    category: str | None = None,
) -> LoadResult:
    """
    Convert files on disk into documents.

    The absolute file path is the document source.

    Args:
        paths: Files to read, usually from collect_files
        extractor: Text extraction task
        max_file_bytes: Files above this size are skipped
        category: Optional department applied to every document

    Returns:
        LoadResult: Documents plus seen/skipped counts
    """
    result = LoadResult(files_seen=len(paths))

    for path in paths:
        source = path_source(path)
        try:
            if path.stat().st_size > max_file_bytes:
                result.files_skipped += 1
                continue
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            log_with_context(logger, logging.WARNING, "Skipping unreadable file", source=source, error=e)
            result.files_skipped += 1
            continue

        text = await _extract(extractor, data, path.suffix, source)
        document = _build_document(text or "", source=source, title=path.name, category=category)
        if document is None:
            result.files_skipped += 1
            continue
        result.documents.append(document)

    return result
