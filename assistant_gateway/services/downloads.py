"""Heuristics deciding whether a chat reply becomes a downloadable document."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import date, datetime, timezone

from .personas import Persona

DEFAULT_MIN_LENGTH = 600

STRUCTURE_MARKERS: tuple[str, ...] = (
    # markdown headers
    "# ",
    "## ",
    "### ",
    # lists
    "1.",
    "2.",
    "- ",
    "* ",
    # document vocabulary
    "Executive Summary",
    "Analysis",
    "Recommendations",
    "Conclusion",
    "Report",
    "Document",
    "Summary",
    "Overview",
    "Introduction",
    "Background",
    "Findings",
    "Results",
    # business vocabulary
    "Budget",
    "Plan",
    "Strategy",
    "Policy",
    "Proposal",
    "Agreement",
)

FINANCIAL_TERMS: tuple[str, ...] = ("$", "budget", "financial", "expense", "revenue", "cost")


@dataclass(frozen=True)
class DownloadFormat:
    extension: str
    mime_type: str


DOCX = DownloadFormat(
    "docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
XLSX = DownloadFormat("xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
CSV = DownloadFormat("csv", "text/csv")


def is_document_worthy(text: str, *, min_length: int = DEFAULT_MIN_LENGTH) -> bool:
    """Return True for long replies that carry document structure or vocabulary."""

    if len(text) <= min_length:
        return False
    if any(marker in text for marker in STRUCTURE_MARKERS):
        return True
    return len(text.split("\n\n")) >= 3 and ":" in text


def has_pipe_table(text: str) -> bool:
    return "-" in text and any("|" in line for line in text.split("\n"))


def choose_download_format(text: str, persona: Persona) -> DownloadFormat:
    """Pick the download type: spreadsheet for finances, CSV for tables, Word otherwise."""

    chosen = DOCX
    if persona is Persona.ACCOUNTING:
        if any(term in text for term in FINANCIAL_TERMS):
            chosen = XLSX
    elif persona is Persona.RESEARCH:
        if "data" in text and ("," in text or "|" in text):
            chosen = CSV

    if has_pipe_table(text):
        chosen = CSV
    return chosen


def encode_data_url(content: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def build_filename(persona: Persona, extension: str, today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"{persona.value}_document_{today.isoformat()}.{extension}"


def build_inline_download(
    text: str,
    persona: Persona,
    *,
    min_length: int = DEFAULT_MIN_LENGTH,
    today: date | None = None,
) -> dict[str, str] | None:
    """
    Build the download attachment for a chat reply, if it qualifies.

    The data URL carries the reply text verbatim (UTF-8) under the chosen MIME
    type; rendering real office formats is the document generator's job.

    Returns:
        ``{"download_url", "filename"}`` or None when the reply is not document-worthy
    """
    if not is_document_worthy(text, min_length=min_length):
        return None

    download_format = choose_download_format(text, persona)
    return {
        "download_url": encode_data_url(text.encode("utf-8"), download_format.mime_type),
        "filename": build_filename(persona, download_format.extension, today),
    }
