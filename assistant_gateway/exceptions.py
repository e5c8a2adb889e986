"""Custom exceptions for Assistant Gateway."""

from __future__ import annotations


class AssistantGatewayError(Exception):
    """Base exception for all Assistant Gateway errors."""

    pass


class ConfigurationError(AssistantGatewayError):
    """Raised when configuration is invalid or missing."""

    pass


class ExtractorNotFoundError(AssistantGatewayError):
    """Raised when requested extractor is not registered."""

    pass


class TranslationError(AssistantGatewayError):
    """Raised when the translation API call fails or returns an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CompletionError(AssistantGatewayError):
    """Raised when the chat completion API call fails."""

    pass


class DocumentGenerationError(AssistantGatewayError):
    """Raised when a downloadable document cannot be rendered."""

    def __init__(self, message: str, *, document_format: str | None = None) -> None:
        super().__init__(message)
        self.document_format = document_format
