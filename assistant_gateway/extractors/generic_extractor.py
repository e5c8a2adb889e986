"""Fallback extractor for uploads no other extractor claims."""

from .base import BaseExtractor
from .heuristics import generic_readable_text

MIN_READABLE_CHARS = 50


class GenericExtractor(BaseExtractor):
    """Scrape printable text runs from files of unknown type."""

    name = "generic"

    @classmethod
    def matches(cls, upload) -> bool:  # type: ignore[override]
        return True

    async def extract(self) -> str:
        mime_type = self.upload.mime_type or "unknown type"
        header = f"File: {self.upload.name} ({mime_type}, {self.upload.size_kb}KB)"

        readable = generic_readable_text(self.upload.content)
        if len(readable) > MIN_READABLE_CHARS:
            return f"{header}\n\nExtracted Text:\n{self._truncate(readable)}"

        return (
            f"{header}\n\nFile uploaded successfully. This file type may require "
            "specialized processing or may contain binary data that cannot be "
            "displayed as text."
        )
