"""Schemas package initialization."""
from .chat import CamelModel, ChatRequest, ChatResponse, UploadedFile
from .documents import DocumentFormat, DocumentRequest, DocumentResponse
from .extraction import ExtractionResult
from .files import FileParseRequest, FileParseResponse, ParsedFile

__all__ = [
    "CamelModel",
    "ChatRequest",
    "ChatResponse",
    "UploadedFile",
    "ExtractionResult",
    "DocumentFormat",
    "DocumentRequest",
    "DocumentResponse",
    "FileParseRequest",
    "FileParseResponse",
    "ParsedFile",
]
