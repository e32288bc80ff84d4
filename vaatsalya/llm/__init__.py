"""Gemini client factory and shared exports."""

import random

import httpx

from .base import (
    ConversationTurn,
    GenerationError,
    GenerationFailure,
    GenerationOutcome,
    GenerationRequest,
    GenerationResult,
    HttpFailure,
    MalformedResponse,
    Role,
    Source,
    TransportFailure,
)
from .gemini import DEFAULT_BASE_URL, DEFAULT_MODEL, GeminiClient, parse_generation_response
from .retry import ClientState, RetryClient, Sleep


def create_client(
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout_seconds: float = 60.0,
    max_attempts: int = 3,
    http_client: httpx.AsyncClient | None = None,
    rng: random.Random | None = None,
    sleep: Sleep | None = None,
) -> RetryClient:
    """Create a Gemini client wrapped with retry logic."""
    if not api_key:
        raise GenerationError("A Gemini API key is required")

    inner = GeminiClient(
        api_key=api_key,
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        http_client=http_client,
    )
    return RetryClient(inner, max_attempts=max_attempts, rng=rng, sleep=sleep)


__all__ = [
    "ClientState",
    "ConversationTurn",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "GeminiClient",
    "GenerationError",
    "GenerationFailure",
    "GenerationOutcome",
    "GenerationRequest",
    "GenerationResult",
    "HttpFailure",
    "MalformedResponse",
    "RetryClient",
    "Role",
    "Source",
    "TransportFailure",
    "create_client",
    "parse_generation_response",
]
