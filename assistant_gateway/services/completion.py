"""OpenAI chat completion client."""

from __future__ import annotations

import time
from typing import Any

import httpx
from openai import AsyncOpenAI, OpenAIError

from ..exceptions import CompletionError, ConfigurationError
from ..monitoring.metrics import observe_completion_duration
from ..utils.config import GlobalSettings
from ..utils.logging import setup_logger

logger = setup_logger(__name__, context={"component": "CompletionClient"})

EMPTY_REPLY = "No response generated"


class CompletionClient:
    """
    Single-shot chat completion against the OpenAI API.

    One request per call: SDK retries are disabled, so a failure surfaces
    immediately as CompletionError.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "gpt-4-turbo-preview",
        temperature: float = 0.7,
        max_tokens: int = 4000,
        base_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.base_url = base_url
        self._client = client

    @classmethod
    def from_settings(cls, settings: GlobalSettings, *, client: Any | None = None) -> CompletionClient:
        return cls(
            settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
            base_url=settings.openai_base_url,
            client=client,
        )

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("OpenAI API key not configured")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
            )
        return self._client

    async def complete(self, system_prompt: str, user_content: str) -> str:
        """
        Ask the model for a reply.

        Args:
            system_prompt: Persona system prompt
            user_content: User message with any attached file content

        Returns:
            The model's reply text, or ``No response generated`` when empty

        Raises:
            ConfigurationError: If no API key is configured
            CompletionError: If the API call fails or returns an unusable payload
        """
        client = self._get_client()
        start = time.perf_counter()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except (OpenAIError, httpx.HTTPError) as exc:
            raise CompletionError(f"OpenAI API error: {exc}") from exc
        finally:
            observe_completion_duration(time.perf_counter() - start)

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise CompletionError(f"Unexpected OpenAI response shape: {exc}") from exc

        if not content:
            logger.warning("Completion returned an empty reply", extra={"status": "warning"})
            return EMPTY_REPLY
        return content
