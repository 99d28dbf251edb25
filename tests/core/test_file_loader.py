"""Tests for turning uploaded files and folders into documents."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from enterprise_rag.core.document_processing import (
    DEFAULT_EXTENSIONS,
    collect_files,
    documents_from_files,
    documents_from_paths,
    path_source,
)
from enterprise_rag.core.document_processing.models import UploadedFile
from enterprise_rag.core.document_processing.tasks import TextExtractionTask
from enterprise_rag.core.exceptions import ParsingError

LIMIT = 1024


@pytest.fixture
def extractor() -> TextExtractionTask:
    return TextExtractionTask()


class TestDocumentsFromFiles:
    @pytest.mark.asyncio
    async def test_builds_documents_with_metadata(self, extractor: TextExtractionTask) -> None:
        files = [
            UploadedFile(name="leave.txt", data=b"  Leave policy  ", relative_path="hr/leave.txt"),
            UploadedFile(name="notes.md", data=b"# Notes"),
        ]

        result = await documents_from_files(files, extractor, LIMIT, category="HR")

        assert result.files_seen == 2
        assert result.files_skipped == 0
        first, second = result.documents
        assert first.text == "Leave policy"
        assert first.metadata.source == "hr/leave.txt"
        assert first.metadata.title == "leave.txt"
        assert first.metadata.category == "HR"
        assert second.metadata.source == "notes.md"

    @pytest.mark.asyncio
    async def test_skips_unsupported_empty_and_oversized(
        self, extractor: TextExtractionTask
    ) -> None:
        files = [
            UploadedFile(name="report.docx", data=b"binary"),
            UploadedFile(name="empty.txt", data=b" \n "),
            UploadedFile(name="huge.txt", data=b"a" * (LIMIT + 1)),
            UploadedFile(name="ok.TXT", data=b"kept"),
        ]

        result = await documents_from_files(files, extractor, LIMIT)

        assert result.files_seen == 4
        assert result.files_skipped == 3
        assert [doc.text for doc in result.documents] == ["kept"]

    @pytest.mark.asyncio
    async def test_parse_failure_is_a_skip(self, caplog) -> None:
        extractor = MagicMock(spec=TextExtractionTask)
        extractor.extract.side_effect = [ParsingError("corrupt", file_type=".pdf"), "second"]
        files = [
            UploadedFile(name="broken.pdf", data=b"%PDF"),
            UploadedFile(name="fine.pdf", data=b"%PDF"),
        ]

        with caplog.at_level(logging.WARNING):
            result = await documents_from_files(files, extractor, LIMIT)

        assert result.files_skipped == 1
        assert [doc.metadata.title for doc in result.documents] == ["fine.pdf"]
        [record] = [r for r in caplog.records if r.getMessage() == "Skipping unreadable file"]
        assert record.source == "broken.pdf"
        assert record.error.startswith("corrupt")


class TestCollectFiles:
    def test_recursive_case_insensitive_sorted(self, tmp_path: Path) -> None:
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "z.TXT").write_text("z")
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "skip.docx").write_text("x")

        found = collect_files(tmp_path, DEFAULT_EXTENSIONS)

        assert found == [tmp_path / "a.md", tmp_path / "b" / "z.TXT"]

    def test_extension_allowlist_without_dots(self, tmp_path: Path) -> None:
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "b.txt").write_text("b")

        assert collect_files(tmp_path, ["txt"]) == [tmp_path / "b.txt"]


class TestDocumentsFromPaths:
    @pytest.mark.asyncio
    async def test_absolute_path_is_source(
        self, tmp_path: Path, extractor: TextExtractionTask
    ) -> None:
        path = tmp_path / "guide.txt"
        path.write_text("Visitor guide")

        result = await documents_from_paths([path], extractor, LIMIT, category="Facilities")

        [document] = result.documents
        assert document.metadata.source == str(path.resolve())
        assert document.metadata.source == path_source(path)
        assert document.metadata.title == "guide.txt"
        assert document.metadata.category == "Facilities"

    @pytest.mark.asyncio
    async def test_oversized_and_missing_files_are_skipped(
        self, tmp_path: Path, extractor: TextExtractionTask
    ) -> None:
        big = tmp_path / "big.txt"
        big.write_bytes(b"a" * (LIMIT + 1))
        gone = tmp_path / "gone.txt"

        result = await documents_from_paths([big, gone], extractor, LIMIT)

        assert result.files_seen == 2
        assert result.files_skipped == 2
        assert result.documents == []
