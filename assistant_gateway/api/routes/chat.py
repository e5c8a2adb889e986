"""Chat and persona endpoints."""

from fastapi import APIRouter, Depends

from ...schemas.chat import ChatRequest, ChatResponse
from ...services.chat import ChatPipeline
from ...services.personas import DEFAULT_PERSONA, list_personas
from ..dependencies import get_chat_pipeline, require_api_key

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(
    request: ChatRequest,
    pipeline: ChatPipeline = Depends(get_chat_pipeline),
) -> ChatResponse:
    """
    Answer a chat message with the selected persona.

    Pipeline failures (translation, completion, configuration) come back as
    a 200 response whose ``error`` field carries the failure text.
    """
    return await pipeline.run(request)


@router.get("/personas")
async def personas() -> dict[str, object]:
    """List the persona keys a chat request can select."""
    return {"personas": list_personas(), "default": DEFAULT_PERSONA.value}
