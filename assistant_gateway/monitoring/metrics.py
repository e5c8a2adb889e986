"""Prometheus metrics definitions for Assistant Gateway."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

CHAT_REQUESTS = Counter(
    "chat_requests_total",
    "Total chat requests by persona and outcome.",
    labelnames=("persona", "status"),
)

TRANSLATION_CALLS = Counter(
    "translation_calls_total",
    "Translation API calls by direction and outcome.",
    labelnames=("direction", "status"),
)

FILE_EXTRACTIONS = Counter(
    "file_extractions_total",
    "Uploaded file extractions by extractor and outcome.",
    labelnames=("extractor", "status"),
)

DOCUMENTS_GENERATED = Counter(
    "documents_generated_total",
    "Downloadable documents produced, by format and origin (chat or generator).",
    labelnames=("format", "origin"),
)

COMPLETION_DURATION = Histogram(
    "completion_duration_seconds",
    "Distribution of chat completion API latencies in seconds.",
    buckets=(0.25, 0.5, 1, 2, 5, 10, 20, 30, 60, 120),
)


def record_chat_request(persona: str, status: str) -> None:
    """Increment the chat request counter with the supplied labels."""

    CHAT_REQUESTS.labels(persona=persona, status=status).inc()


def record_translation_call(direction: str, status: str) -> None:
    """Increment the translation counter; direction is ``inbound`` or ``outbound``."""

    TRANSLATION_CALLS.labels(direction=direction, status=status).inc()


def record_file_extraction(extractor: str, status: str) -> None:
    """Increment the extraction counter for one uploaded file."""

    FILE_EXTRACTIONS.labels(extractor=extractor, status=status).inc()


def record_document_generated(document_format: str, origin: str) -> None:
    """Increment the generated document counter."""

    DOCUMENTS_GENERATED.labels(format=document_format, origin=origin).inc()


def observe_completion_duration(duration_seconds: float) -> None:
    """Record the chat completion latency in seconds."""

    COMPLETION_DURATION.observe(max(duration_seconds, 0.0))
