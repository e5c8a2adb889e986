"""Pydantic schemas for chat requests, uploaded files, and chat responses."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadedFile(CamelModel):
    """A file attached to a chat message, as sent by the browser client."""

    name: str = Field(..., description="Original file name including extension")
    mime_type: str = Field(default="", alias="type", description="Declared MIME type")
    size: int | None = Field(default=None, ge=0, description="Declared size in bytes")
    content: bytes = Field(
        default=b"",
        description="Raw file bytes, sent as a list of byte values or a base64 string",
    )

    @field_validator("content", mode="before")
    @classmethod
    def _coerce_content(cls, value: Any) -> bytes:
        if value is None:
            return b""
        if isinstance(value, bytes | bytearray):
            return bytes(value)
        if isinstance(value, list):
            try:
                return bytes(value)
            except (TypeError, ValueError) as exc:
                raise ValueError("content must be a list of byte values (0-255)") from exc
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as exc:
                raise ValueError("content string must be valid base64") from exc
        raise ValueError("content must be a list of byte values or a base64 string")

    @property
    def byte_size(self) -> int:
        """Declared size, or the received byte length when none was declared."""

        return self.size if self.size is not None else len(self.content)

    @property
    def size_kb(self) -> int:
        return round(self.byte_size / 1024)


class ChatRequest(CamelModel):
    """Request schema for the chat endpoint."""

    message: str = Field(default="", description="User message in any language")
    assistant_type: str | None = Field(default=None, description="Persona key, e.g. 'hr'")
    assistant_id: str | None = Field(
        default=None, description="Legacy persona identifier, e.g. 'hr-assistant'"
    )
    thread_id: str | None = Field(default=None, description="Opaque conversation identifier")
    language: str | None = Field(
        default=None, description="Accepted for compatibility; language is auto-detected"
    )
    files: list[UploadedFile] = Field(default_factory=list)

    @property
    def persona_key(self) -> str | None:
        return self.assistant_type or self.assistant_id


class ChatResponse(CamelModel):
    """Response schema for the chat endpoint."""

    response: str = Field(..., description="Reply in the user's language")
    original_response: str | None = Field(default=None, description="English model reply")
    thread_id: str = Field(..., description="Thread identifier echoed or generated")
    source_language: str | None = Field(default=None, description="Detected input language")
    download_url: str | None = Field(default=None, description="data: URL of the document")
    filename: str | None = Field(default=None, description="Suggested download filename")
    error: str | None = Field(default=None, description="Error text when the reply is an apology")
