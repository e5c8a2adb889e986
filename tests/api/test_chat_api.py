"""Tests for the chat and persona endpoints."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from assistant_gateway.api.dependencies import get_chat_pipeline
from assistant_gateway.api.main import app
from assistant_gateway.exceptions import CompletionError
from assistant_gateway.services.chat import ChatPipeline
from assistant_gateway.services.translation import TranslationResult


@pytest.fixture(name="client")
def client_fixture(fake_translator, fake_completion, settings) -> Iterator[TestClient]:
    """Provide a test client whose chat pipeline uses fake upstream clients."""

    pipeline = ChatPipeline(fake_translator, fake_completion, settings=settings)
    app.dependency_overrides[get_chat_pipeline] = lambda: pipeline

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def test_chat_english_message(client: TestClient, fake_translator) -> None:
    """A plain English exchange returns camelCase fields and omits empty ones."""

    fake_translator.translate.return_value = TranslationResult("Hello", "en")

    response = client.post(
        "/api/v1/chat",
        json={"message": "Hello", "assistantType": "secretary", "threadId": "thread_1"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "response": "Here is my answer.",
        "originalResponse": "Here is my answer.",
        "threadId": "thread_1",
        "sourceLanguage": "en",
    }


def test_chat_accepts_byte_list_files(client: TestClient, fake_translator, fake_completion) -> None:
    """Uploaded files arrive as byte arrays and reach the model as text."""

    fake_translator.translate.return_value = TranslationResult("Read this", "en")

    response = client.post(
        "/api/v1/chat",
        json={
            "message": "Read this",
            "assistantType": "research",
            "files": [
                {"name": "notes.txt", "type": "text/plain", "size": 5, "content": list(b"hello")},
                {"name": "scan.pdf", "type": "application/pdf", "size": 3, "content": [0, 1, 2]},
            ],
        },
    )

    assert response.status_code == 200
    user_content = fake_completion.complete.await_args.args[1]
    assert "--- Content from notes.txt ---" in user_content
    assert "--- Content from scan.pdf ---" in user_content


def test_chat_empty_office_uploads_still_answer(
    client: TestClient, fake_translator, fake_completion
) -> None:
    """Zero-byte documents are described to the model and the request still succeeds."""

    fake_translator.translate.return_value = TranslationResult("Summarise these", "en")

    response = client.post(
        "/api/v1/chat",
        json={
            "message": "Summarise these",
            "files": [
                {"name": "minutes.docx", "type": "", "size": 0, "content": []},
                {"name": "budget.xlsx", "type": "", "size": 0, "content": []},
            ],
        },
    )

    assert response.status_code == 200
    assert response.json()["response"] == "Here is my answer."
    user_content = fake_completion.complete.await_args.args[1]
    docx_section = user_content.split("--- Content from minutes.docx ---\n", 1)[1].split(
        "\n--- End of minutes.docx ---", 1
    )[0]
    xlsx_section = user_content.split("--- Content from budget.xlsx ---\n", 1)[1].split(
        "\n--- End of budget.xlsx ---", 1
    )[0]
    assert docx_section.startswith("Word Document: minutes.docx (0KB)")
    assert "text extraction was limited" in docx_section
    assert xlsx_section.startswith("Excel Spreadsheet: budget.xlsx (0KB)")
    assert "data extraction was limited" in xlsx_section


def test_chat_completion_failure_is_200_with_error(
    client: TestClient, fake_translator, fake_completion
) -> None:
    """Upstream failures are reported in the body, not as HTTP errors."""

    fake_translator.translate.return_value = TranslationResult("Hello", "en")
    fake_completion.complete.side_effect = CompletionError("OpenAI API error: boom")

    response = client.post("/api/v1/chat", json={"message": "Hello"})

    assert response.status_code == 200
    body = response.json()
    assert body["error"] == "OpenAI API error: boom"
    assert body["response"] == (
        "I apologize, but I encountered an error: OpenAI API error: boom. Please try again."
    )
    assert "originalResponse" not in body


def test_chat_rejects_invalid_file_bytes(client: TestClient) -> None:
    response = client.post(
        "/api/v1/chat",
        json={"message": "Hi", "files": [{"name": "a.txt", "type": "text/plain", "content": [999]}]},
    )

    assert response.status_code == 422


def test_list_personas(client: TestClient) -> None:
    response = client.get("/api/v1/personas")

    assert response.status_code == 200
    assert response.json() == {
        "personas": ["hr", "secretary", "lawyer", "research", "accounting", "marketing"],
        "default": "secretary",
    }


def test_cors_preflight_allows_client_headers(client: TestClient) -> None:
    response = client.options(
        "/api/v1/chat",
        headers={
            "Origin": "https://app.example.test",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, x-client-info, apikey, content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in {"*", "https://app.example.test"}
