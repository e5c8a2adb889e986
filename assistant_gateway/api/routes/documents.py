"""Document generator endpoint."""

import asyncio

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ...exceptions import DocumentGenerationError
from ...monitoring.metrics import record_document_generated
from ...schemas.documents import DocumentRequest, DocumentResponse
from ...services.documents import render_document
from ...services.downloads import encode_data_url
from ...services.personas import resolve_persona
from ...utils.config import GlobalSettings
from ...utils.logging import setup_logger
from ..dependencies import get_settings_dependency, require_api_key

logger = setup_logger(__name__, context={"component": "DocumentAPI"})
router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post("/documents", response_model=DocumentResponse)
async def generate_document(
    request: DocumentRequest,
    settings: GlobalSettings = Depends(get_settings_dependency),
) -> DocumentResponse | JSONResponse:
    """
    Render text into a downloadable document.

    Returns:
        DocumentResponse with the file as a data URL, 400 when content is
        empty, or 500 when rendering fails
    """
    if not request.content.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Content is required"},
        )

    persona = resolve_persona(request.assistant_type) if request.assistant_type else None
    try:
        rendered = await asyncio.to_thread(
            render_document,
            request.content,
            request.format,
            title=request.title,
            thaana_font_file=settings.pdf_thaana_font_file,
        )
    except DocumentGenerationError as exc:
        logger.error(
            f"Document generation failed: {exc}",
            extra={"status": "error", "persona": persona.value if persona else "-"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(exc)},
        )

    record_document_generated(rendered.format, "generator")
    logger.info(
        f"Generated {rendered.format} document {rendered.filename} ({len(rendered.content)} bytes)",
        extra={"status": "success", "persona": persona.value if persona else "-"},
    )
    return DocumentResponse(
        success=True,
        filename=rendered.filename,
        file_url=encode_data_url(rendered.content, rendered.content_type),
        content_type=rendered.content_type,
        format=rendered.format,
        title=rendered.title,
    )
