"""Extractor registry mapping uploaded files to content extractors."""

from ..exceptions import ExtractorNotFoundError
from ..schemas.chat import UploadedFile
from ..schemas.extraction import ExtractionResult
from .base import BaseExtractor
from .excel_extractor import ExcelExtractor
from .generic_extractor import GenericExtractor
from .pdf_extractor import PDFExtractor
from .text_extractor import JSONExtractor, TextExtractor
from .word_extractor import WordExtractor

# Extractor registry - checked in insertion order, generic fallback last.
_EXTRACTOR_REGISTRY: dict[str, type[BaseExtractor]] = {}


def register_extractor(name: str, extractor_class: type[BaseExtractor]) -> None:
    """
    Register a new extractor class.

    Args:
        name: Unique identifier for the extractor
        extractor_class: Extractor class to register
    """
    _EXTRACTOR_REGISTRY.pop(name, None)
    fallback = _EXTRACTOR_REGISTRY.pop(GenericExtractor.name, None)
    _EXTRACTOR_REGISTRY[name] = extractor_class
    if fallback is not None and name != GenericExtractor.name:
        _EXTRACTOR_REGISTRY[GenericExtractor.name] = fallback


def get_extractor(name: str) -> type[BaseExtractor]:
    """
    Get an extractor class by name.

    Raises:
        ExtractorNotFoundError: If extractor is not registered
    """
    if name not in _EXTRACTOR_REGISTRY:
        available = ", ".join(sorted(_EXTRACTOR_REGISTRY)) or "none"
        raise ExtractorNotFoundError(
            f"Extractor '{name}' is not registered. Available extractors: {available}."
        )
    return _EXTRACTOR_REGISTRY[name]


def list_extractors() -> list[str]:
    """Return registered extractor names in dispatch order."""
    return list(_EXTRACTOR_REGISTRY.keys())


def select_extractor(upload: UploadedFile) -> type[BaseExtractor]:
    """Return the first registered extractor accepting the upload's declared type or name."""

    for extractor_class in _EXTRACTOR_REGISTRY.values():
        if extractor_class.matches(upload):
            return extractor_class
    return GenericExtractor


async def extract_file_content(
    upload: UploadedFile,
    *,
    max_chars: int | None = None,
) -> ExtractionResult:
    """Extract text from one uploaded file. Never raises."""

    extractor_class = select_extractor(upload)
    return await extractor_class(upload, max_chars=max_chars).process()


register_extractor("text", TextExtractor)
register_extractor("json", JSONExtractor)
register_extractor("pdf", PDFExtractor)
register_extractor("word", WordExtractor)
register_extractor("excel", ExcelExtractor)
register_extractor("generic", GenericExtractor)

__all__ = [
    "BaseExtractor",
    "ExcelExtractor",
    "GenericExtractor",
    "JSONExtractor",
    "PDFExtractor",
    "TextExtractor",
    "WordExtractor",
    "extract_file_content",
    "get_extractor",
    "list_extractors",
    "register_extractor",
    "select_extractor",
]
