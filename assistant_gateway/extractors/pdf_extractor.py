"""Extractor for PDF uploads using pdfplumber and PyMuPDF."""

import io

import pdfplumber
import pymupdf  # PyMuPDF (fitz)

from ..utils.logging import setup_logger
from .base import BaseExtractor
from .heuristics import collapse_whitespace, pdf_heuristic_text

logger = setup_logger(__name__, context={"component": "PDFExtractor"})

MIN_TEXT_CHARS = 50


class PDFExtractor(BaseExtractor):
    """
    Extract text from PDF uploads.

    Strategy, in order:
    - pdfplumber: layout-aware page text
    - pymupdf (PyMuPDF): tolerant of damaged cross-reference tables
    - byte heuristics: text operators, then long printable runs

    Anything that still yields 50 characters or fewer is reported as a
    probable scanned or image-only document.
    """

    name = "pdf"
    MIME_TYPES = frozenset({"application/pdf"})
    EXTENSIONS = frozenset({".pdf"})

    async def extract(self) -> str:
        text = await self._run_in_thread(self._extract_with_parsers)
        if len(text) <= MIN_TEXT_CHARS:
            text = pdf_heuristic_text(self.upload.content)

        if len(text) > MIN_TEXT_CHARS:
            return f"PDF Document: {self.label}\n\nExtracted Content:\n{self._truncate(text)}"

        return (
            f"PDF Document: {self.label}\n\nNote: This PDF may contain images, scanned "
            "content, or complex formatting that requires specialized OCR tools for text "
            "extraction. The document structure was detected but text content could not "
            "be reliably extracted."
        )

    def _extract_with_parsers(self) -> str:
        """Synchronous parser chain executed in a worker thread."""

        data = self.upload.content
        if not data:
            return ""

        text = self._extract_with_pdfplumber(data)
        if len(text) > MIN_TEXT_CHARS:
            return text
        return self._extract_with_pymupdf(data) or text

    def _extract_with_pdfplumber(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            logger.debug("pdfplumber could not read %s: %s", self.upload.name, exc)
            return ""
        return "\n\n".join(page.strip() for page in pages if page.strip())

    def _extract_with_pymupdf(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            logger.debug("PyMuPDF could not read %s: %s", self.upload.name, exc)
            return ""
        return collapse_whitespace(" ".join(pages))
