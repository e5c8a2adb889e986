"""Chat pipeline: extraction, translation round-trip, completion, download detection."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date

from ..exceptions import AssistantGatewayError, TranslationError
from ..extractors import extract_file_content
from ..monitoring.metrics import (
    record_chat_request,
    record_document_generated,
    record_translation_call,
)
from ..schemas.chat import ChatRequest, ChatResponse
from ..schemas.extraction import ExtractionResult
from ..utils.config import GlobalSettings
from ..utils.logging import log_chat_attempt, setup_logger
from .completion import CompletionClient
from .downloads import build_inline_download
from .personas import Persona, get_system_prompt, resolve_persona
from .translation import DHIVEHI, ENGLISH, GoogleTranslateClient, contains_thaana, is_english

logger = setup_logger(__name__, context={"component": "ChatPipeline"})

APOLOGY_TEMPLATE = "I apologize, but I encountered an error: {error}. Please try again."


@dataclass(frozen=True)
class InboundMessage:
    english_text: str
    source_language: str


def format_file_context(results: list[ExtractionResult]) -> str:
    """Join extracted file contents into the block appended to the user message."""

    if not results:
        return ""
    sections = "".join(
        f"\n\n--- Content from {result.name} ---\n{result.content}\n--- End of {result.name} ---\n"
        for result in results
    )
    return f"\n\nAttached files content:{sections}"


def new_thread_id() -> str:
    return f"thread_{int(time.time() * 1000)}"


class ChatPipeline:
    """
    Runs one chat request end to end.

    The steps are strictly sequential. External failures degrade instead of
    propagating: translation errors fall back to English and completion
    errors turn into an apology reply.
    """

    def __init__(
        self,
        translator: GoogleTranslateClient,
        completion: CompletionClient,
        *,
        settings: GlobalSettings,
        persona_overrides: Mapping[Persona, str] | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self.translator = translator
        self.completion = completion
        self.settings = settings
        self.persona_overrides = dict(persona_overrides or {})
        self._today = today

    async def extract_files(self, request: ChatRequest) -> list[ExtractionResult]:
        return [
            await extract_file_content(upload, max_chars=self.settings.extraction_max_chars)
            for upload in request.files
        ]

    async def translate_inbound(self, message: str) -> InboundMessage:
        """Translate the user's message to English and detect its language."""

        if not message.strip():
            return InboundMessage(english_text=message, source_language=ENGLISH)

        try:
            result = await self.translator.translate(message, ENGLISH)
        except TranslationError as exc:
            record_translation_call("inbound", "error")
            logger.warning(
                f"Inbound translation failed, treating message as English: {exc}",
                extra={"status": "degraded"},
            )
            return InboundMessage(english_text=message, source_language=ENGLISH)

        record_translation_call("inbound", "success")
        detected = result.detected_source_language
        if not detected:
            detected = DHIVEHI if contains_thaana(message) else ENGLISH
        return InboundMessage(english_text=result.text, source_language=detected)

    async def translate_outbound(self, reply: str, target: str) -> str:
        """Translate the English reply back to the user's language, keeping English on failure."""

        try:
            result = await self.translator.translate(reply, target, source=ENGLISH)
        except TranslationError as exc:
            record_translation_call("outbound", "error")
            logger.warning(
                f"Outbound translation to '{target}' failed, returning English reply: {exc}",
                extra={"status": "degraded"},
            )
            return reply
        record_translation_call("outbound", "success")
        return result.text

    async def run(self, request: ChatRequest) -> ChatResponse:
        """
        Process a chat request.

        Returns:
            ChatResponse; pipeline failures produce an apology response
            carrying the error text instead of raising
        """
        start = time.perf_counter()
        persona = resolve_persona(request.persona_key)
        thread_id = request.thread_id or new_thread_id()

        try:
            response = await self._run(request, persona, thread_id)
            status = "success"
        except AssistantGatewayError as exc:
            response = ChatResponse(
                response=APOLOGY_TEMPLATE.format(error=exc),
                thread_id=thread_id,
                error=str(exc),
            )
            status = "error"
        except Exception as exc:
            logger.exception(
                f"Unexpected error while processing chat request: {exc}",
                extra={"persona": persona.value, "thread_id": thread_id, "status": "error"},
            )
            response = ChatResponse(
                response=APOLOGY_TEMPLATE.format(error=exc),
                thread_id=thread_id,
                error=str(exc),
            )
            status = "error"

        duration_ms = int((time.perf_counter() - start) * 1000)
        record_chat_request(persona.value, status)

        extra_context: dict[str, object] = {
            "files": len(request.files),
            "language": response.source_language or "unknown",
        }
        if response.error:
            extra_context["error"] = response.error
        log_chat_attempt(
            logger,
            persona=persona.value,
            thread_id=thread_id,
            duration_ms=duration_ms,
            status=status,
            **extra_context,
        )
        return response

    async def _run(self, request: ChatRequest, persona: Persona, thread_id: str) -> ChatResponse:
        extracted = await self.extract_files(request)
        inbound = await self.translate_inbound(request.message)

        user_content = inbound.english_text + format_file_context(extracted)
        system_prompt = get_system_prompt(persona, self.persona_overrides)

        english_reply = await self.completion.complete(system_prompt, user_content)

        reply = english_reply
        if not is_english(inbound.source_language):
            reply = await self.translate_outbound(english_reply, inbound.source_language)

        download = build_inline_download(
            english_reply,
            persona,
            min_length=self.settings.download_min_length,
            today=self._today() if self._today else None,
        )
        if download:
            record_document_generated(download["filename"].rsplit(".", 1)[-1], "chat")

        return ChatResponse(
            response=reply,
            original_response=english_reply,
            thread_id=thread_id,
            source_language=inbound.source_language,
            download_url=download["download_url"] if download else None,
            filename=download["filename"] if download else None,
        )
