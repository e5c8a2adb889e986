"""Schemas for the document generator endpoint."""

from typing import Literal

from pydantic import Field

from .chat import CamelModel

DocumentFormat = Literal["txt", "html", "pdf", "docx", "xlsx", "csv"]


class DocumentRequest(CamelModel):
    """Request schema for rendering text into a downloadable document."""

    content: str = Field(default="", description="Document body, usually a model reply")
    format: DocumentFormat = Field(default="docx", description="Target file format")
    assistant_type: str | None = Field(default=None, description="Persona that produced the text")
    title: str | None = Field(default=None, description="Document title")


class DocumentResponse(CamelModel):
    """Response schema for a rendered document."""

    success: bool
    filename: str
    file_url: str = Field(..., description="data: URL holding the rendered file")
    content_type: str
    format: DocumentFormat
    title: str
