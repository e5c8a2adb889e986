"""Integration services: translation, completion, personas, chat pipeline, documents."""

from .chat import ChatPipeline
from .completion import CompletionClient
from .documents import RenderedDocument, render_document
from .personas import Persona, get_system_prompt, list_personas, resolve_persona
from .translation import GoogleTranslateClient, TranslationResult

__all__ = [
    "ChatPipeline",
    "CompletionClient",
    "GoogleTranslateClient",
    "Persona",
    "RenderedDocument",
    "TranslationResult",
    "get_system_prompt",
    "list_personas",
    "render_document",
    "resolve_persona",
]
