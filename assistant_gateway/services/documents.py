"""Render assistant text into downloadable office documents."""

from __future__ import annotations

import html
import io
import re
import textwrap
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
import pymupdf  # PyMuPDF (fitz)
from docx import Document as DocxDocument

from ..exceptions import DocumentGenerationError
from ..utils.logging import setup_logger
from .translation import contains_thaana

logger = setup_logger(__name__, context={"component": "DocumentRenderer"})

DEFAULT_TITLE = "Document"
THAANA_FONT = "MV Faseyha"

CONTENT_TYPES: dict[str, str] = {
    "txt": "text/plain;charset=utf-8",
    "html": "text/html;charset=utf-8",
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv;charset=utf-8",
}

_SEPARATOR_CELL = re.compile(r"^:?-{3,}:?$")
_HEADING = re.compile(r"^(#{1,3})\s+(.*)$")
_BULLET = re.compile(r"^\s*[-*]\s+(.*)$")
_UNSAFE_TITLE_CHARS = re.compile(r"[^a-zA-Z0-9]")

# PDF page geometry (US Letter, points)
_PAGE_WIDTH = 612
_PAGE_HEIGHT = 792
_MARGIN = 50
_LINE_HEIGHT = 15
_WRAP_WIDTH = 95


@dataclass(frozen=True)
class RenderedDocument:
    filename: str
    content: bytes
    content_type: str
    format: str
    title: str


def split_table_row(line: str) -> list[str]:
    return [cell.strip() for cell in line.strip().strip("|").split("|")]


def is_separator_row(cells: list[str]) -> bool:
    non_empty = [cell for cell in cells if cell]
    return bool(non_empty) and all(_SEPARATOR_CELL.match(cell) for cell in non_empty)


def extract_table_rows(content: str) -> list[list[str]]:
    """Return the rows of every pipe-delimited line, separator rows dropped."""

    rows: list[list[str]] = []
    for line in content.split("\n"):
        if "|" not in line:
            continue
        cells = split_table_row(line)
        if is_separator_row(cells):
            continue
        rows.append(cells)
    return rows


def _table_frame(rows: list[list[str]]) -> pd.DataFrame:
    width = max(len(row) for row in rows)
    padded = [row + [""] * (width - len(row)) for row in rows]
    header, body = padded[0], padded[1:]
    # Duplicate or blank headers would collide as DataFrame columns.
    columns = [cell or f"Column {index + 1}" for index, cell in enumerate(header)]
    if len(set(columns)) != len(columns):
        columns = [f"{cell} ({index + 1})" for index, cell in enumerate(columns)]
    return pd.DataFrame(body, columns=columns)


def _content_lines(content: str) -> list[str]:
    return [line for line in content.split("\n") if line.strip()]


def build_document_filename(title: str | None, document_format: str, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    timestamp = now.strftime("%Y-%m-%dT%H-%M-%S-") + f"{now.microsecond // 1000:03d}Z"
    clean_title = _UNSAFE_TITLE_CHARS.sub("_", title or "document")
    return f"{clean_title}-{timestamp}.{document_format}"


def _render_txt(title: str, content: str) -> bytes:
    return f"{title}\n{'=' * len(title)}\n\n{content}".encode("utf-8")


def _render_html(title: str, content: str) -> bytes:
    dhivehi = contains_thaana(content) or contains_thaana(title)
    lang, direction = ("dv", "rtl") if dhivehi else ("en", "ltr")
    font = f"'{THAANA_FONT}', 'Faruma', sans-serif" if dhivehi else "Arial, sans-serif"
    safe_title = html.escape(title)
    body = html.escape(content).replace("\n", "<br>")
    document = f"""<!DOCTYPE html>
<html lang="{lang}" dir="{direction}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{safe_title}</title>
    <style>
        body {{ font-family: {font}; line-height: 1.6; margin: 40px; direction: {direction}; max-width: 800px; }}
        h1 {{ color: #333; border-bottom: 2px solid #007acc; padding-bottom: 10px; margin-bottom: 20px; }}
        .content {{ white-space: pre-wrap; line-height: 1.8; }}
        @media print {{ body {{ margin: 20px; }} }}
    </style>
</head>
<body>
    <h1>{safe_title}</h1>
    <div class="content">{body}</div>
</body>
</html>"""
    return document.encode("utf-8")


def _pdf_fonts(title: str, content: str, font_file: Path | None) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return the (title, body) font arguments for ``Page.insert_text``."""

    if not (contains_thaana(content) or contains_thaana(title)):
        return {"fontname": "hebo"}, {"fontname": "helv"}
    if font_file is None:
        # Base-14 fonts have no Thaana glyphs.
        logger.warning(
            "No Thaana font file configured; Dhivehi text will be blank in the PDF",
            extra={"status": "degraded"},
        )
        return {"fontname": "hebo"}, {"fontname": "helv"}
    thaana = {"fontname": "thaana", "fontfile": str(font_file)}
    return thaana, thaana


def _render_pdf(title: str, content: str, *, font_file: Path | None = None) -> bytes:
    title_font, body_font = _pdf_fonts(title, content, font_file)
    doc = pymupdf.open()
    try:
        page = doc.new_page(width=_PAGE_WIDTH, height=_PAGE_HEIGHT)
        y = _MARGIN + 16
        page.insert_text((_MARGIN, y), title, fontsize=16, **title_font)
        y += 2 * _LINE_HEIGHT

        for paragraph in _content_lines(content):
            for line in textwrap.wrap(paragraph, width=_WRAP_WIDTH) or [""]:
                if y > _PAGE_HEIGHT - _MARGIN:
                    page = doc.new_page(width=_PAGE_WIDTH, height=_PAGE_HEIGHT)
                    y = _MARGIN + 12
                page.insert_text((_MARGIN, y), line, fontsize=11, **body_font)
                y += _LINE_HEIGHT

        return doc.tobytes()
    finally:
        doc.close()


def _render_docx(title: str, content: str) -> bytes:
    doc = DocxDocument()
    if contains_thaana(content) or contains_thaana(title):
        doc.styles["Normal"].font.name = THAANA_FONT

    doc.add_heading(title, level=0)

    pending_table: list[list[str]] = []

    def flush_table() -> None:
        if not pending_table:
            return
        width = max(len(row) for row in pending_table)
        table = doc.add_table(rows=len(pending_table), cols=width)
        table.style = "Table Grid"
        for row_index, row in enumerate(pending_table):
            for col_index, cell in enumerate(row):
                table.cell(row_index, col_index).text = cell
        pending_table.clear()

    for line in content.split("\n"):
        if "|" in line:
            cells = split_table_row(line)
            if not is_separator_row(cells):
                pending_table.append(cells)
            continue
        flush_table()

        stripped = line.strip()
        if not stripped:
            continue
        heading = _HEADING.match(stripped)
        bullet = _BULLET.match(stripped)
        if heading:
            doc.add_heading(heading.group(2), level=len(heading.group(1)))
        elif bullet:
            doc.add_paragraph(bullet.group(1), style="List Bullet")
        else:
            doc.add_paragraph(stripped)
    flush_table()

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _content_frame(title: str, content: str) -> pd.DataFrame:
    rows = extract_table_rows(content)
    if rows:
        return _table_frame(rows)
    return pd.DataFrame({title: _content_lines(content)})


def _render_xlsx(title: str, content: str) -> bytes:
    buffer = io.BytesIO()
    frame = _content_frame(title, content)
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name="Document", index=False)
    return buffer.getvalue()


def _render_csv(title: str, content: str) -> bytes:
    frame = _content_frame(title, content)
    return frame.to_csv(index=False).encode("utf-8")


_RENDERERS: dict[str, Callable[..., bytes]] = {
    "txt": _render_txt,
    "html": _render_html,
    "pdf": _render_pdf,
    "docx": _render_docx,
    "xlsx": _render_xlsx,
    "csv": _render_csv,
}


def supported_formats() -> list[str]:
    return list(_RENDERERS)


def render_document(
    content: str,
    document_format: str,
    *,
    title: str | None = None,
    now: datetime | None = None,
    thaana_font_file: Path | None = None,
) -> RenderedDocument:
    """
    Render text into a document of the requested format.

    Args:
        content: Document body (markdown-flavoured text)
        document_format: One of txt, html, pdf, docx, xlsx, csv
        title: Optional title; defaults to ``Document``
        now: Timestamp used in the filename (tests)
        thaana_font_file: TrueType font used for Dhivehi text in PDFs

    Raises:
        DocumentGenerationError: If content is empty, the format is unknown,
            or the rendering library fails
    """
    if not content or not content.strip():
        raise DocumentGenerationError("Content is required", document_format=document_format)

    renderer = _RENDERERS.get(document_format)
    if renderer is None:
        raise DocumentGenerationError(
            f"Unsupported format: {document_format}", document_format=document_format
        )

    resolved_title = title or DEFAULT_TITLE
    options: dict[str, Any] = {}
    if document_format == "pdf" and thaana_font_file is not None:
        options["font_file"] = thaana_font_file
    try:
        data = renderer(resolved_title, content, **options)
    except DocumentGenerationError:
        raise
    except Exception as exc:
        raise DocumentGenerationError(
            f"Failed to render {document_format} document: {exc}",
            document_format=document_format,
        ) from exc

    return RenderedDocument(
        filename=build_document_filename(title, document_format, now),
        content=data,
        content_type=CONTENT_TYPES[document_format],
        format=document_format,
        title=resolved_title,
    )
