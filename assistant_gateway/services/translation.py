"""Google Translate v2 client and language helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import httpx

from ..exceptions import TranslationError
from ..utils.config import DEFAULT_TRANSLATE_URL, GlobalSettings
from ..utils.logging import setup_logger
from ..utils.retry import RetryConfig, execute_with_retry

logger = setup_logger(__name__, context={"component": "GoogleTranslateClient"})

ENGLISH = "en"
DHIVEHI = "dv"

_THAANA = re.compile(r"[\u0780-\u07BF]")


def contains_thaana(text: str) -> bool:
    """Return True when the text contains any Thaana (Dhivehi script) codepoint."""

    return bool(_THAANA.search(text or ""))


def is_english(language_code: str | None) -> bool:
    """Compare the primary language subtag with English, ignoring case and region."""

    if not language_code:
        return False
    return language_code.replace("_", "-").split("-")[0].lower() == ENGLISH


@dataclass(frozen=True)
class TranslationResult:
    """Translated text plus the source language reported by the API."""

    text: str
    detected_source_language: str | None = None


class GoogleTranslateClient:
    """Thin async client for the Google Cloud Translation v2 REST API using httpx."""

    def __init__(
        self,
        api_key: str | None,
        *,
        url: str = DEFAULT_TRANSLATE_URL,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: GlobalSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> GoogleTranslateClient:
        return cls(
            settings.google_api_key,
            url=settings.translate_url,
            timeout=settings.translate_timeout_seconds,
            retry_config=settings.translation_retry,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def translate(
        self,
        text: str,
        target: str,
        source: str | None = None,
    ) -> TranslationResult:
        """
        Translate ``text`` into ``target``.

        Args:
            text: Text to translate
            target: Target language code (e.g. ``en``, ``dv``)
            source: Optional source language; omitted to let the API detect it

        Returns:
            TranslationResult with the translated text and detected source language

        Raises:
            TranslationError: If the key is missing or the API call fails
        """
        if not self.api_key:
            raise TranslationError("Google API key not configured")

        body: dict[str, Any] = {"q": text, "target": target, "format": "text"}
        if source:
            body["source"] = source

        client_kwargs: dict[str, Any] = {"timeout": self.timeout}
        if self._transport is not None:
            client_kwargs["transport"] = self._transport

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:

                async def _send() -> httpx.Response:
                    return await client.post(self.url, params={"key": self.api_key}, json=body)

                response = await execute_with_retry(
                    _send,
                    retry_config=self.retry_config,
                    log=logger,
                )
        except httpx.TimeoutException as exc:
            raise TranslationError(
                f"Google Translate request timed out after {self.timeout} seconds"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TranslationError(f"Google Translate request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise TranslationError(
                f"Google Translate returned a non-JSON response (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc

        if response.is_error:
            raise TranslationError(
                f"Google Translate API error: {payload}",
                status_code=response.status_code,
            )

        return self._parse_payload(payload)

    @staticmethod
    def _parse_payload(payload: Any) -> TranslationResult:
        try:
            translation = payload["data"]["translations"][0]
            translated_text = translation["translatedText"]
        except (KeyError, IndexError, TypeError) as exc:
            raise TranslationError(
                f"Unexpected Google Translate response shape: {payload}"
            ) from exc

        detected = translation.get("detectedSourceLanguage")
        return TranslationResult(
            text=str(translated_text),
            detected_source_language=str(detected).lower() if detected else None,
        )
