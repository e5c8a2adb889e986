"""Byte-pattern fallbacks used when a real parser cannot read an upload.

These scrape text out of raw bytes with regular expressions. They are only
reached after pdfplumber/PyMuPDF, python-docx or pandas have failed or
returned nothing, e.g. for legacy ``.doc``/``.xls`` files or truncated uploads.
"""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")

_PDF_TEXT_BLOCK = re.compile(rb"\bBT\b(.*?)\bET\b", re.DOTALL)
_PDF_STRING_LITERAL = re.compile(rb"\(((?:\\.|[^\\()])*)\)", re.DOTALL)
_PDF_ESCAPES = {
    b"n": b"\n",
    b"r": b"\r",
    b"t": b"\t",
    b"b": b"\b",
    b"f": b"\f",
    b"(": b"(",
    b")": b")",
    b"\\": b"\\",
}
_PDF_STRUCTURE_WORDS = ("obj", "endobj", "stream")
_PDF_OPERATOR_MIN_CHARS = 100

_ASCII_RUN_TEMPLATE = r"[\x20-\x7E]{%d,}"
_LATIN_RUN = re.compile(r"[\x20-\x7E\u00A0-\u024F]+")

_DOCX_TEXT_RUN = re.compile(r"<w:t[^>]*>([^<]+)</w:t>")
_XLSX_SHARED_STRING = re.compile(r"<t[^>]*>([^<]+)</t>")
_XLSX_CELL_VALUE = re.compile(r"<v>([^<]+)</v>")
_XML_MARKERS = ("xml", "xmlns", "w:")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _unescape_pdf_literal(raw: bytes) -> bytes:
    out = bytearray()
    index = 0
    while index < len(raw):
        char = raw[index : index + 1]
        if char == b"\\" and index + 1 < len(raw):
            nxt = raw[index + 1 : index + 2]
            out += _PDF_ESCAPES.get(nxt, nxt)
            index += 2
            continue
        out += char
        index += 1
    return bytes(out)


def pdf_text_operators(data: bytes) -> str:
    """Return the string literals shown between ``BT``/``ET`` text operators."""

    literals: list[str] = []
    for block in _PDF_TEXT_BLOCK.findall(data):
        for literal in _PDF_STRING_LITERAL.findall(block):
            literals.append(_unescape_pdf_literal(literal).decode("latin-1"))
    return collapse_whitespace(" ".join(literals))


def printable_ascii_runs(
    text: str,
    *,
    min_length: int = 20,
    exclude: tuple[str, ...] = (),
) -> list[str]:
    """Return printable ASCII runs of at least ``min_length`` characters.

    Runs containing any of the ``exclude`` substrings are dropped.
    """

    pattern = re.compile(_ASCII_RUN_TEMPLATE % min_length)
    runs = [match.group(0).strip() for match in pattern.finditer(text)]
    return [run for run in runs if run and not any(word in run for word in exclude)]


def pdf_heuristic_text(data: bytes) -> str:
    """Scrape text from raw PDF bytes.

    Text operators are tried first. When they give fewer than 100 characters
    the printable-run scrape also runs and the longer of the two wins.
    """

    extracted = pdf_text_operators(data)
    if len(extracted) >= _PDF_OPERATOR_MIN_CHARS:
        return extracted
    decoded = data.decode("latin-1")
    runs = printable_ascii_runs(decoded, min_length=20, exclude=_PDF_STRUCTURE_WORDS)
    scraped = collapse_whitespace(" ".join(runs))
    return scraped if len(scraped) > len(extracted) else extracted


def docx_heuristic_text(data: bytes) -> str:
    """Scrape ``<w:t>`` runs, falling back to long non-XML printable runs."""

    decoded = data.decode("utf-8", errors="ignore")
    runs = _DOCX_TEXT_RUN.findall(decoded)
    if runs:
        return " ".join(runs).strip()

    candidates = [
        run
        for run in _LATIN_RUN.findall(decoded)
        if len(run) > 10 and not any(marker in run for marker in _XML_MARKERS)
    ]
    text = collapse_whitespace(" ".join(candidates))
    return text if len(text) > 100 else ""


def xlsx_heuristic_text(data: bytes) -> tuple[str, str]:
    """Scrape shared strings, then raw cell values, from spreadsheet bytes.

    Returns:
        Tuple of (kind, text) where kind is ``"strings"``, ``"values"`` or ``""``.
    """

    decoded = data.decode("utf-8", errors="ignore")
    shared = [item for item in _XLSX_SHARED_STRING.findall(decoded) if item.strip()]
    if shared:
        return "strings", "\n".join(shared)
    values = _XLSX_CELL_VALUE.findall(decoded)
    if values:
        return "values", "\n".join(values)
    return "", ""


def generic_readable_text(data: bytes) -> str:
    """Join every printable Latin run found in the bytes."""

    decoded = data.decode("utf-8", errors="ignore")
    return " ".join(_LATIN_RUN.findall(decoded)).strip()
