"""Tests for the PDF extractor."""

from __future__ import annotations

import pytest

from assistant_gateway.extractors.pdf_extractor import PDFExtractor

PDF_MIME = "application/pdf"


class TestPDFExtractor:
    """Test suite for PDFExtractor."""

    @pytest.mark.asyncio
    async def test_extracts_text_from_real_pdf(self, make_upload, pdf_bytes):
        """Text PDFs are read by the parser chain."""
        upload = make_upload("report.pdf", pdf_bytes, PDF_MIME)

        result = await PDFExtractor(upload).process()

        assert result.success is True
        assert result.extractor == "pdf"
        assert result.content.startswith("PDF Document: report.pdf (")
        assert "Extracted Content:" in result.content
        assert "Quarterly revenue report" in result.content

    @pytest.mark.asyncio
    async def test_corrupted_pdf_gets_scanned_placeholder(self, make_upload):
        """Unreadable PDFs yield the OCR placeholder instead of failing."""
        upload = make_upload("broken.pdf", b"%PDF-1.4 garbage", PDF_MIME)

        result = await PDFExtractor(upload).process()

        assert result.success is True
        assert "requires specialized OCR tools" in result.content

    @pytest.mark.asyncio
    async def test_empty_pdf_gets_placeholder(self, make_upload):
        """Empty uploads never raise."""
        upload = make_upload("empty.pdf", b"", PDF_MIME)

        result = await PDFExtractor(upload).process()

        assert result.success is True
        assert result.content.startswith("PDF Document: empty.pdf (0KB)")

    @pytest.mark.asyncio
    async def test_heuristic_reads_text_operators(self, make_upload):
        """Raw text operators are scraped when the parsers give up."""
        content = (
            b"%PDF-1.4\n1 0 obj\nstream\n"
            b"BT /F1 12 Tf (The board approved the annual budget for the new clinic project) Tj ET\n"
            b"endstream\nendobj\n"
        )
        upload = make_upload("raw.pdf", content, PDF_MIME)

        result = await PDFExtractor(upload).process()

        assert "The board approved the annual budget" in result.content

    @pytest.mark.asyncio
    async def test_short_operator_text_does_not_mask_readable_runs(self, make_upload):
        """A page label in text operators still lets the body text through."""
        content = (
            b"%PDF-1.4\nBT (Page 1) Tj ET\n"
            b"\x00\x01The quarterly financial statements show strong growth"
            b"\x00\x02Revenue increased by twelve percent\x00"
        )
        upload = make_upload("mixed.pdf", content, PDF_MIME)

        result = await PDFExtractor(upload).process()

        assert "Extracted Content:" in result.content
        assert "quarterly financial statements" in result.content

    @pytest.mark.asyncio
    async def test_parser_crash_becomes_failure_placeholder(self, make_upload, monkeypatch):
        """An unexpected exception is reported per file, not raised."""

        def _boom(self):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(PDFExtractor, "_extract_with_parsers", _boom)
        upload = make_upload("crash.pdf", b"%PDF-1.4", PDF_MIME)

        result = await PDFExtractor(upload).process()

        assert result.success is False
        assert result.content.startswith('I received the file "crash.pdf"')
        assert "parser exploded" in result.content
