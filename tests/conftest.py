"""Pytest configuration - no path manipulation, rely on proper package installation."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, Mock

import pytest

from assistant_gateway.schemas.chat import UploadedFile
from assistant_gateway.services.completion import CompletionClient
from assistant_gateway.services.translation import GoogleTranslateClient
from assistant_gateway.utils.config import GlobalSettings, _get_settings_cached

_ISOLATED_ENV = (
    "ASSIST_API_KEYS",
    "ASSIST_OPENAI_API_KEY",
    "ASSIST_GOOGLE_API_KEY",
    "ASSIST_PERSONAS_FILE",
    "ASSIST_PDF_THAANA_FONT_FILE",
    "ASSIST_CORS_ORIGINS",
    "OPENAI_API_KEY",
    "GOOGLE_API_KEY",
)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep developer credentials out of tests and reset the settings cache."""

    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)

    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def settings() -> GlobalSettings:
    """Settings built from defaults only, ignoring any .env files."""

    return GlobalSettings(_env_file=None)


@pytest.fixture
def make_upload() -> Callable[..., UploadedFile]:
    """Factory building uploaded files the way the browser client sends them."""

    def _make(name: str, content: bytes, mime_type: str = "", size: int | None = None) -> UploadedFile:
        return UploadedFile(
            name=name,
            mime_type=mime_type,
            size=len(content) if size is None else size,
            content=content,
        )

    return _make


@pytest.fixture
def fake_translator() -> Mock:
    """Translation client double; tests set ``translate`` side effects."""

    translator = Mock(spec=GoogleTranslateClient)
    translator.translate = AsyncMock()
    return translator


@pytest.fixture
def fake_completion() -> Mock:
    """Completion client double replying with a short English answer."""

    completion = Mock(spec=CompletionClient)
    completion.complete = AsyncMock(return_value="Here is my answer.")
    return completion
