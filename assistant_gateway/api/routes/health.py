"""Health check endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ...utils.config import GlobalSettings
from ..dependencies import get_settings_dependency

router = APIRouter()


@router.get("/health")
async def health_check(
    settings: GlobalSettings = Depends(get_settings_dependency),
) -> dict[str, Any]:
    """Health check endpoint reporting which upstream integrations are configured."""

    openai_configured = bool(settings.openai_api_key)
    translate_configured = bool(settings.google_api_key)

    overall_status = "healthy"
    if not (openai_configured and translate_configured):
        overall_status = "degraded"

    return {
        "status": overall_status,
        "service": "assistant_gateway",
        "environment": settings.environment,
        "openai": {"configured": openai_configured, "model": settings.openai_model},
        "translate": {"configured": translate_configured},
    }
