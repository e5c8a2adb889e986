"""Extractors for plain text, CSV, and JSON uploads."""

import json

from .base import BaseExtractor


class TextExtractor(BaseExtractor):
    """Decode plain text and CSV uploads as UTF-8."""

    name = "text"
    MIME_TYPES = frozenset({"text/plain", "text/csv", "text/markdown"})
    EXTENSIONS = frozenset({".txt", ".csv", ".md"})

    async def extract(self) -> str:
        text = self._truncate(self._decode_utf8())
        mime_type = self.upload.mime_type or "text/plain"
        return f"File Content ({mime_type}):\n{text}"


class JSONExtractor(BaseExtractor):
    """
    Decode JSON uploads, pretty-printing them when they parse.

    Unparseable JSON is passed through as raw text rather than rejected.
    """

    name = "json"
    MIME_TYPES = frozenset({"application/json"})
    EXTENSIONS = frozenset({".json"})

    async def extract(self) -> str:
        raw_text = self._decode_utf8()
        try:
            parsed = json.loads(raw_text)
        except json.JSONDecodeError:
            return f"JSON file content:\n{self._truncate(raw_text)}"

        pretty = json.dumps(parsed, indent=2, ensure_ascii=False)
        return f"JSON Data from {self.upload.name}:\n{self._truncate(pretty)}"
