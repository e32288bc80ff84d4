"""Google Gemini generateContent endpoint over plain HTTP."""

from typing import Any

import httpx

from vaatsalya.logging_config import get_logger

from .base import (
    GenerationRequest,
    GenerationResult,
    HttpFailure,
    MalformedResponse,
    Source,
    TransportFailure,
)

logger = get_logger("gemini")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.5-flash-preview-09-2025"
REQUEST_HEADERS = {"Content-Type": "application/json"}


class GeminiClient:
    """Performs exactly one generateContent round trip per call."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    def endpoint_url(self, model: str) -> str:
        """URL for a model's generateContent method, without the credential."""
        return f"{self.base_url}/{model}:generateContent"

    async def send(self, model: str, request: GenerationRequest) -> GenerationResult:
        """POST the request once and normalize the response.

        Raises:
            TransportFailure: no HTTP response was received
            HttpFailure: the status was outside 2xx (429 included)
            MalformedResponse: the body could not be decoded, or a 2xx body
                was not a JSON object
        """
        try:
            response = await self._http.post(
                self.endpoint_url(model),
                params={"key": self.api_key},
                headers=REQUEST_HEADERS,
                json=request.to_payload(),
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise TransportFailure(f"Request timed out after {self.timeout_seconds}s: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransportFailure(f"Transport error: {exc}") from exc
        except httpx.DecodingError as exc:
            raise MalformedResponse(f"Response body could not be decoded: {exc}") from exc

        if not response.is_success:
            raise HttpFailure(response.status_code, _error_detail(response))

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response body is not valid JSON: {exc}") from exc

        return parse_generation_response(body)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()


def parse_generation_response(body: Any) -> GenerationResult:
    """Extract text and grounding sources from a generateContent body.

    Only ``candidates[0]`` is consumed. Missing candidates or text yields an
    empty-text result; only a non-object body is malformed.
    """
    if not isinstance(body, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(body).__name__}")

    candidate = _first(body.get("candidates"))
    part = _first(_get(_get(candidate, "content"), "parts"))
    text = _get(part, "text")
    if not isinstance(text, str) or not text:
        logger.debug("Response carried no candidate text")
        return GenerationResult(text="", sources=[])

    attributions = _get(_get(candidate, "groundingMetadata"), "groundingAttributions")
    sources: list[Source] = []
    if isinstance(attributions, list):
        for attribution in attributions:
            web = _get(attribution, "web")
            uri = _get(web, "uri")
            title = _get(web, "title")
            if isinstance(uri, str) and uri and isinstance(title, str) and title:
                sources.append(Source(uri=uri, title=title))

    return GenerationResult(text=text, sources=sources)


def _get(value: Any, key: str) -> Any:
    return value.get(key) if isinstance(value, dict) else None


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _error_detail(response: httpx.Response) -> str | None:
    """Pull the endpoint's error message out of a failure body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    message = _get(_get(body, "error"), "message")
    return message if isinstance(message, str) and message else None
