"""Extractor for spreadsheet uploads using pandas."""

from __future__ import annotations

import io

import pandas as pd

from ..utils.logging import setup_logger
from .base import BaseExtractor
from .heuristics import xlsx_heuristic_text

logger = setup_logger(__name__, context={"component": "ExcelExtractor"})


class ExcelExtractor(BaseExtractor):
    """Extractor for Excel workbooks; every sheet is rendered as CSV text."""

    name = "excel"
    MIME_TYPES = frozenset({"application/vnd.ms-excel"})
    MIME_SUBSTRINGS = ("spreadsheetml",)
    EXTENSIONS = frozenset({".xlsx", ".xls"})

    async def extract(self) -> str:
        text = await self._run_in_thread(self._extract_with_pandas)
        if text:
            return f"Excel Spreadsheet: {self.label}\n\nExtracted Data:\n{self._truncate(text)}"

        kind, scraped = xlsx_heuristic_text(self.upload.content)
        if kind == "strings":
            return f"Excel Spreadsheet: {self.label}\n\nExtracted Data:\n{self._truncate(scraped)}"
        if kind == "values":
            return (
                f"Excel Spreadsheet: {self.label}\n\nExtracted Values:\n"
                f"{self._truncate(scraped)}"
            )

        return (
            f"Excel Spreadsheet: {self.label}\n\nNote: Spreadsheet structure detected but "
            "data extraction was limited. The file may contain complex formulas, charts, "
            "or formatting."
        )

    def _extract_with_pandas(self) -> str:
        """Synchronous workbook parsing executed in a worker thread."""

        if not self.upload.content:
            return ""
        try:
            sheets: dict[str, pd.DataFrame] = pd.read_excel(
                io.BytesIO(self.upload.content),
                sheet_name=None,
            )
        except Exception as exc:
            logger.debug("pandas could not read %s: %s", self.upload.name, exc)
            return ""

        sections = []
        for sheet_name, frame in sheets.items():
            if frame.empty:
                continue
            csv_text = frame.to_csv(index=False).strip()
            sections.append(f"Sheet: {sheet_name}\n{csv_text}")
        return "\n\n".join(sections)
