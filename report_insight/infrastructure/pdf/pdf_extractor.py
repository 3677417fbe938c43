"""PDF text extraction - implements IPdfTextExtractor port."""

from __future__ import annotations

import io

import structlog
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from report_insight.domain.shared.errors import PdfExtractionError

logger = structlog.get_logger(__name__)


class PypdfTextExtractor:
    """
    Extracts report text with pypdf.

    Page texts are joined with a single space; the whole text is trimmed.
    Layout is not preserved, which is fine for prompting.

    Example:
        >>> extractor = PypdfTextExtractor()
        >>> text = extractor.extract_text(pdf_bytes)
    """

    def extract_text(self, data: bytes) -> str:
        """
        Extract the text of every page.

        Args:
            data: Raw PDF bytes

        Returns:
            Concatenated page text

        Raises:
            PdfExtractionError: If the PDF cannot be read, is encrypted
                with a password, or contains no text
        """
        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted and not reader.decrypt(""):
                raise PdfExtractionError("PDF is password protected")
            pages = [page.extract_text() or "" for page in reader.pages]
        except PyPdfError as e:
            logger.warning("pdf.unreadable", error=str(e))
            raise PdfExtractionError(f"Could not read PDF: {e}") from e

        text = " ".join(pages).strip()
        if not text:
            raise PdfExtractionError("No text could be extracted from the PDF")

        logger.info("pdf.extracted", pages=len(pages), chars=len(text))
        return text
