"""Schemas for the standalone file-parser endpoint."""

from pydantic import Field

from .chat import CamelModel, UploadedFile


class FileParseRequest(CamelModel):
    """Request schema for parsing uploaded files without chatting."""

    files: list[UploadedFile] = Field(default_factory=list)


class ParsedFile(CamelModel):
    """Extraction outcome for one uploaded file."""

    name: str
    mime_type: str = Field(alias="type")
    size: int
    content: str = Field(..., description="Extracted text or explanatory placeholder")
    success: bool
    extractor: str


class FileParseResponse(CamelModel):
    files: list[ParsedFile]
