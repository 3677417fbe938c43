"""
Tests for the pypdf text extractor.
"""

import io
from unittest.mock import MagicMock, patch

import pytest
from pypdf import PdfWriter

from report_insight.domain.report.ports import IPdfTextExtractor
from report_insight.domain.shared.errors import PdfExtractionError
from report_insight.infrastructure.pdf.pdf_extractor import PypdfTextExtractor

READER_PATH = "report_insight.infrastructure.pdf.pdf_extractor.PdfReader"


def _page(text: str | None) -> MagicMock:
    page = MagicMock()
    page.extract_text.return_value = text
    return page


def _reader(*texts: str | None, encrypted: bool = False) -> MagicMock:
    reader = MagicMock()
    reader.is_encrypted = encrypted
    reader.pages = [_page(text) for text in texts]
    return reader


@pytest.fixture
def extractor() -> PypdfTextExtractor:
    return PypdfTextExtractor()


class TestPypdfTextExtractor:
    """Text extraction and failure modes."""

    def test_implements_port(self, extractor: PypdfTextExtractor) -> None:
        assert isinstance(extractor, IPdfTextExtractor)

    def test_pages_joined_with_space(self, extractor: PypdfTextExtractor) -> None:
        with patch(READER_PATH, return_value=_reader("Hemoglobin 11.2", None, "Iron 40 ")):
            text = extractor.extract_text(b"%PDF-1.4")

        assert text == "Hemoglobin 11.2  Iron 40"

    def test_not_a_pdf(self, extractor: PypdfTextExtractor) -> None:
        with pytest.raises(PdfExtractionError, match="Could not read PDF"):
            extractor.extract_text(b"this is not a pdf at all")

    def test_pdf_without_text(self, extractor: PypdfTextExtractor) -> None:
        """A scanned or blank document has nothing to summarize."""
        buffer = io.BytesIO()
        writer = PdfWriter()
        writer.add_blank_page(width=200, height=200)
        writer.write(buffer)

        with pytest.raises(PdfExtractionError, match="No text"):
            extractor.extract_text(buffer.getvalue())

    def test_password_protected(self, extractor: PypdfTextExtractor) -> None:
        reader = _reader("secret", encrypted=True)
        reader.decrypt.return_value = 0

        with patch(READER_PATH, return_value=reader):
            with pytest.raises(PdfExtractionError, match="password"):
                extractor.extract_text(b"%PDF-1.4")

    def test_encrypted_with_empty_password(self, extractor: PypdfTextExtractor) -> None:
        """Owner-password-only PDFs open with an empty user password."""
        reader = _reader("Glucose 90", encrypted=True)
        reader.decrypt.return_value = 1

        with patch(READER_PATH, return_value=reader):
            assert extractor.extract_text(b"%PDF-1.4") == "Glucose 90"

        reader.decrypt.assert_called_once_with("")
