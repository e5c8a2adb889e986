"""Tests for request/response schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from assistant_gateway.schemas import ChatRequest, ChatResponse, DocumentRequest, UploadedFile


class TestUploadedFile:
    """Test suite for UploadedFile content coercion."""

    def test_byte_list_content(self):
        """The browser client sends file bytes as a list of integers."""
        upload = UploadedFile.model_validate(
            {"name": "a.txt", "type": "text/plain", "size": 5, "content": [104, 101, 108, 108, 111]}
        )

        assert upload.content == b"hello"
        assert upload.mime_type == "text/plain"

    def test_base64_content(self):
        upload = UploadedFile.model_validate({"name": "a.txt", "content": "aGVsbG8="})

        assert upload.content == b"hello"

    @pytest.mark.parametrize("content", [[300], [-1], "not base64!!", 42])
    def test_invalid_content_rejected(self, content):
        with pytest.raises(ValidationError):
            UploadedFile.model_validate({"name": "a.txt", "content": content})

    def test_size_defaults_to_received_length(self):
        upload = UploadedFile(name="a.bin", content=b"x" * 2048)

        assert upload.byte_size == 2048
        assert upload.size_kb == 2

    def test_declared_size_wins(self):
        upload = UploadedFile(name="a.bin", size=5120, content=b"")

        assert upload.size_kb == 5


class TestChatRequest:
    """Test suite for ChatRequest."""

    def test_camel_case_fields(self):
        request = ChatRequest.model_validate(
            {"message": "Hi", "assistantType": "lawyer", "threadId": "t-1", "language": "dv"}
        )

        assert request.assistant_type == "lawyer"
        assert request.thread_id == "t-1"
        assert request.files == []

    def test_persona_key_prefers_assistant_type(self):
        request = ChatRequest.model_validate({"assistantType": "hr", "assistantId": "lawyer-assistant"})

        assert request.persona_key == "hr"

    def test_persona_key_falls_back_to_legacy_id(self):
        request = ChatRequest.model_validate({"assistantId": "research-assistant"})

        assert request.persona_key == "research-assistant"


def test_chat_response_serialises_camel_case_without_nulls():
    response = ChatResponse(response="Hola", original_response="Hello", thread_id="t-9")

    assert response.model_dump(by_alias=True, exclude_none=True) == {
        "response": "Hola",
        "originalResponse": "Hello",
        "threadId": "t-9",
    }


def test_document_request_rejects_unknown_format():
    with pytest.raises(ValidationError):
        DocumentRequest.model_validate({"content": "x", "format": "rtf"})
