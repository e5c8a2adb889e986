"""Extractor for Word uploads (.docx parsed, legacy .doc scraped)."""

import io

from docx import Document as DocxDocument

from ..utils.logging import setup_logger
from .base import BaseExtractor
from .heuristics import docx_heuristic_text

logger = setup_logger(__name__, context={"component": "WordExtractor"})


class WordExtractor(BaseExtractor):
    """
    Extract text from Word documents.

    python-docx reads Office Open XML (.docx) files, including table cells.
    Legacy .doc files (Office 97-2003) are not zip archives, so python-docx
    rejects them and the byte heuristics take over.
    """

    name = "word"
    MIME_TYPES = frozenset({"application/msword"})
    MIME_SUBSTRINGS = ("wordprocessingml",)
    EXTENSIONS = frozenset({".docx", ".doc"})

    async def extract(self) -> str:
        text = await self._run_in_thread(self._extract_with_docx)
        if not text:
            text = docx_heuristic_text(self.upload.content)

        if text:
            return f"Word Document: {self.label}\n\nExtracted Content:\n{self._truncate(text)}"

        return (
            f"Word Document: {self.label}\n\nNote: Document structure detected but text "
            "extraction was limited. This may be due to complex formatting, tables, or "
            "embedded objects."
        )

    def _extract_with_docx(self) -> str:
        """Synchronous python-docx extraction executed in a worker thread."""

        if not self.upload.content:
            return ""
        try:
            doc = DocxDocument(io.BytesIO(self.upload.content))
        except Exception as exc:
            logger.debug("python-docx could not read %s: %s", self.upload.name, exc)
            return ""

        blocks = [paragraph.text.strip() for paragraph in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                if any(cells):
                    blocks.append(" | ".join(cells))

        return "\n".join(block for block in blocks if block)
