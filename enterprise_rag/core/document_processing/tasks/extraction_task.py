"""
Text extraction task.

Turns raw file bytes into plain text based on the file extension:
PDF via LangChain PyPDFLoader, spreadsheets via openpyxl/xlrd, text and
Markdown decoded as UTF-8. Unsupported extensions yield an empty string.

Dependencies: langchain_community.document_loaders, openpyxl, xlrd
System role: First stage of document ingestion pipeline
"""

import os
import shutil
import tempfile
from datetime import date, datetime
from io import BytesIO
from typing import Any, Iterable

import openpyxl
import xlrd
from langchain_community.document_loaders import PyPDFLoader

from enterprise_rag.core.exceptions import ParsingError

PDF_EXTENSIONS = frozenset({".pdf"})
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls"})
TEXT_EXTENSIONS = frozenset({".txt", ".md", ".markdown"})
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | SPREADSHEET_EXTENSIONS | TEXT_EXTENSIONS


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and ensure it has a leading dot."""
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = f".{extension}"
    return extension


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _render_sheet(name: str, rows: Iterable[Iterable[Any]]) -> str:
    lines = []
    for row in rows:
        cells = [_format_cell(value) for value in row]
        # Blank rows carry no text
        if any(cells):
            lines.append("\t".join(cells))
    return f"[Sheet: {name}]\n" + "\n".join(lines)


class TextExtractionTask:
    """Extract plain text from PDF, spreadsheet and text files."""

    def extract(self, data: bytes, extension: str, file_name: str | None = None) -> str:
        """
        Extract text from raw file bytes.

        Args:
            data: Raw file content
            extension: File extension hint (".pdf", "xlsx", ...)
            file_name: Optional name used in error context

        Returns:
            str: Extracted text, empty for unsupported formats

        Raises:
            ParsingError: When a supported file cannot be read
        """
        ext = normalize_extension(extension)

        try:
            if ext in PDF_EXTENSIONS:
                return self._extract_pdf(data)
            if ext == ".xlsx":
                return self._extract_xlsx(data)
            if ext == ".xls":
                return self._extract_xls(data)
            if ext in TEXT_EXTENSIONS:
                return data.decode("utf-8", errors="replace")
        except ParsingError:
            raise
        except Exception as e:
            raise ParsingError(
                f"Failed to extract text: {e}",
                document_id=file_name,
                file_type=ext,
            ) from e

        return ""

    def _extract_pdf(self, data: bytes) -> str:
        """Load PDF text page by page through a temporary file."""
        temp_dir = tempfile.mkdtemp(prefix="rag_extract_")
        local_path = os.path.join(temp_dir, "document.pdf")
        try:
            with open(local_path, "wb") as f:
                f.write(data)
            pages = PyPDFLoader(local_path).load()
            return "\n".join(page.page_content for page in pages)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    def _extract_xlsx(self, data: bytes) -> str:
        workbook = openpyxl.load_workbook(BytesIO(data), read_only=True, data_only=True)
        try:
            return "\n\n".join(
                _render_sheet(sheet.title, sheet.iter_rows(values_only=True))
                for sheet in workbook.worksheets
            )
        finally:
            workbook.close()

    def _extract_xls(self, data: bytes) -> str:
        book = xlrd.open_workbook(file_contents=data)
        return "\n\n".join(
            _render_sheet(sheet.name, (sheet.row_values(i) for i in range(sheet.nrows)))
            for sheet in book.sheets()
        )
