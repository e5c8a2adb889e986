"""File-parser endpoint: run the extractors without chatting."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ...extractors import extract_file_content
from ...schemas.files import FileParseRequest, FileParseResponse, ParsedFile
from ...utils.config import GlobalSettings
from ...utils.logging import setup_logger
from ..dependencies import get_settings_dependency, require_api_key

logger = setup_logger(__name__, context={"component": "FileParserAPI"})
router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post("/files/parse", response_model=FileParseResponse)
async def parse_files(
    request: FileParseRequest,
    settings: GlobalSettings = Depends(get_settings_dependency),
) -> FileParseResponse | JSONResponse:
    """Extract text from each uploaded file; per-file failures become placeholders."""

    if not request.files:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "No files provided"},
        )

    parsed: list[ParsedFile] = []
    for upload in request.files:
        result = await extract_file_content(upload, max_chars=settings.extraction_max_chars)
        parsed.append(
            ParsedFile(
                name=result.name,
                mime_type=result.mime_type,
                size=result.size,
                content=result.content,
                success=result.success,
                extractor=result.extractor,
            )
        )

    logger.info(
        f"Parsed {len(parsed)} file(s)",
        extra={"status": "success" if all(item.success for item in parsed) else "partial"},
    )
    return FileParseResponse(files=parsed)
