"""Opt-in retry policy for the POST calls made to the translation API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import cast

import httpx
from pydantic import BaseModel, ConfigDict, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


class RetryableStatusError(Exception):
    """Raised inside the retry loop for a response whose status is worth retrying."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Retryable HTTP status {response.status_code}")
        self.response = response


class RetryConfig(BaseModel):
    """Retry behaviour for translation calls. Disabled unless configured."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    max_attempts: int = Field(default=3, ge=1)
    backoff_factor: float = Field(default=0.5, gt=0)
    max_backoff: float = Field(default=10.0, gt=0)
    status_forcelist: list[int] = Field(default_factory=lambda: [429, 500, 502, 503, 504])


def _last_response(retry_state: RetryCallState) -> httpx.Response:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    if isinstance(exception, RetryableStatusError):
        # Out of attempts: hand the last response back so the caller can report it.
        return exception.response
    raise cast(BaseException, exception)


async def execute_with_retry(
    send: Callable[[], Awaitable[httpx.Response]],
    *,
    retry_config: RetryConfig,
    log: logging.Logger | logging.LoggerAdapter | None = None,
) -> httpx.Response:
    """Send a request, retrying transport errors and listed statuses when enabled."""

    if not retry_config.enabled or retry_config.max_attempts <= 1:
        return await send()

    sleep_logger = log or logger
    if isinstance(sleep_logger, logging.LoggerAdapter):
        sleep_logger = sleep_logger.logger

    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(retry_config.max_attempts),
        wait=wait_exponential(multiplier=retry_config.backoff_factor, max=retry_config.max_backoff),
        retry=retry_if_exception_type((httpx.TransportError, RetryableStatusError)),
        before_sleep=before_sleep_log(sleep_logger, logging.WARNING),
        retry_error_callback=_last_response,
    ):
        with attempt:
            response = await send()
            if response.status_code in retry_config.status_forcelist:
                raise RetryableStatusError(response)
    return response
