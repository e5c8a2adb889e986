"""Base extractor abstract class for uploaded file content."""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import PurePath
from typing import Any, ClassVar, TypeVar

from ..monitoring.metrics import record_file_extraction
from ..schemas.chat import UploadedFile
from ..schemas.extraction import ExtractionResult
from ..utils.logging import setup_logger

logger = setup_logger(__name__, context={"component": "BaseExtractor"})

T = TypeVar("T")

DEFAULT_MAX_CHARS = 5000
TRUNCATION_MARKER = "\n... (content truncated)"


class BaseExtractor(ABC):
    """
    Abstract base class for all uploaded-file extractors.

    Subclasses declare which files they accept through ``MIME_TYPES``,
    ``MIME_SUBSTRINGS`` and ``EXTENSIONS``; dispatch relies on the declared
    type and file name only, never on the bytes themselves.
    """

    name: ClassVar[str] = "base"
    MIME_TYPES: ClassVar[frozenset[str]] = frozenset()
    MIME_SUBSTRINGS: ClassVar[tuple[str, ...]] = ()
    EXTENSIONS: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, upload: UploadedFile, *, max_chars: int | None = None):
        """
        Initialize the extractor for one uploaded file.

        Args:
            upload: File received with the request
            max_chars: Upper bound on extracted characters kept in the output
        """
        self.upload = upload
        self.max_chars = max_chars or DEFAULT_MAX_CHARS
        self.truncated = False

    @classmethod
    def matches(cls, upload: UploadedFile) -> bool:
        """Return True when the declared MIME type or extension belongs to this extractor."""

        mime_type = (upload.mime_type or "").lower()
        if mime_type in cls.MIME_TYPES:
            return True
        if mime_type and any(fragment in mime_type for fragment in cls.MIME_SUBSTRINGS):
            return True
        return PurePath(upload.name).suffix.lower() in cls.EXTENSIONS

    async def _run_in_thread(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Execute a blocking parser in a thread to avoid blocking the event loop."""

        return await asyncio.to_thread(func, *args, **kwargs)

    @property
    def label(self) -> str:
        """Human-readable ``name (NKB)`` label used in extractor output headers."""

        return f"{self.upload.name} ({self.upload.size_kb}KB)"

    def _truncate(self, text: str) -> str:
        """Slice extracted text to the configured character budget."""

        if len(text) <= self.max_chars:
            return text
        self.truncated = True
        return f"{text[: self.max_chars]}{TRUNCATION_MARKER}"

    def _decode_utf8(self) -> str:
        return self.upload.content.decode("utf-8", errors="replace")

    @abstractmethod
    async def extract(self) -> str:
        """
        Extract text from the uploaded bytes.

        Returns:
            Extracted text with a descriptive header, or a placeholder explaining
            why nothing useful could be read.
        """
        pass

    def failure_placeholder(self, error: Exception) -> str:
        """Text substituted for the file when extraction raised."""

        return (
            f'I received the file "{self.upload.name}" but encountered an issue reading it: '
            f"{error}. Please let me know what you'd like me to help you with regarding "
            "this file, and I'll do my best to assist you."
        )

    async def process(self) -> ExtractionResult:
        """
        Run extraction and wrap the outcome. Never raises.

        Returns:
            ExtractionResult carrying extracted text or a failure placeholder
        """
        start = time.perf_counter()
        success = True
        try:
            content = await self.extract()
        except Exception as exc:
            success = False
            content = self.failure_placeholder(exc)
            logger.warning(
                "Extraction failed for %s: %s",
                self.upload.name,
                exc,
                exc_info=True,
                extra={"component": self.__class__.__name__, "status": "error"},
            )

        duration_ms = int((time.perf_counter() - start) * 1000)
        record_file_extraction(self.name, "success" if success else "error")
        logger.debug(
            "Extracted %d characters from %s",
            len(content),
            self.upload.name,
            extra={
                "component": self.__class__.__name__,
                "status": "success" if success else "error",
                "duration_ms": duration_ms,
            },
        )

        return ExtractionResult(
            name=self.upload.name,
            mime_type=self.upload.mime_type,
            size=self.upload.byte_size,
            extractor=self.name,
            content=content,
            success=success,
            truncated=self.truncated,
            duration_ms=duration_ms,
        )
