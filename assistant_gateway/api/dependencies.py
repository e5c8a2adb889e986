"""Shared FastAPI dependencies."""

from __future__ import annotations

import secrets

from fastapi import (
    Depends,
    HTTPException,
    Security,
    status,
)
from fastapi.security import APIKeyHeader

from ..services.chat import ChatPipeline
from ..services.completion import CompletionClient
from ..services.personas import load_persona_prompts
from ..services.translation import GoogleTranslateClient
from ..utils.config import GlobalSettings, get_settings

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_settings_dependency() -> GlobalSettings:
    return get_settings()


async def require_api_key(
    x_api_key: str | None = Security(api_key_header),
    settings: GlobalSettings = Depends(get_settings_dependency),
) -> str | None:
    """Validate the provided API key when API keys are configured; open otherwise."""

    configured_keys = settings.api_keys
    if not configured_keys:
        return None

    if x_api_key is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key.",
        )

    for candidate in configured_keys:
        if secrets.compare_digest(x_api_key, candidate):
            return candidate

    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Invalid API key.",
    )


def get_translation_client(
    settings: GlobalSettings = Depends(get_settings_dependency),
) -> GoogleTranslateClient:
    return GoogleTranslateClient.from_settings(settings)


def get_completion_client(
    settings: GlobalSettings = Depends(get_settings_dependency),
) -> CompletionClient:
    return CompletionClient.from_settings(settings)


def get_chat_pipeline(
    settings: GlobalSettings = Depends(get_settings_dependency),
    translator: GoogleTranslateClient = Depends(get_translation_client),
    completion: CompletionClient = Depends(get_completion_client),
) -> ChatPipeline:
    """Build the chat pipeline for one request from the current settings."""

    overrides = load_persona_prompts(settings.personas_file) if settings.personas_file else None
    return ChatPipeline(translator, completion, settings=settings, persona_overrides=overrides)
