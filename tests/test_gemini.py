"""Tests for the Gemini wire format and response normalization."""

import json

import httpx
import pytest
from pydantic import ValidationError

from vaatsalya.llm import (
    ConversationTurn,
    GeminiClient,
    GenerationFailure,
    GenerationRequest,
    GenerationResult,
    MalformedResponse,
    Role,
    Source,
    parse_generation_response,
)


def _attribution(uri: str | None, title: str | None) -> dict:
    web = {}
    if uri is not None:
        web["uri"] = uri
    if title is not None:
        web["title"] = title
    return {"web": web}


class TestRequestPayload:
    """Tests for GenerationRequest validation and serialization."""

    def test_payload_with_system_instruction(self):
        """Turns and instruction should render in generateContent shape."""
        request = GenerationRequest(
            turns=[
                ConversationTurn(role=Role.USER, text="Hi"),
                ConversationTurn(role=Role.MODEL, text="Hello!"),
                ConversationTurn(role="user", text="How are you?"),
            ],
            system_instruction="Be kind",
        )

        assert request.to_payload() == {
            "contents": [
                {"role": "user", "parts": [{"text": "Hi"}]},
                {"role": "model", "parts": [{"text": "Hello!"}]},
                {"role": "user", "parts": [{"text": "How are you?"}]},
            ],
            "systemInstruction": {"parts": [{"text": "Be kind"}]},
        }

    def test_payload_without_system_instruction(self):
        """The systemInstruction key is omitted when not provided."""
        payload = GenerationRequest.from_prompt("Hi").to_payload()
        assert "systemInstruction" not in payload

    def test_requires_at_least_one_turn(self):
        """An empty conversation is rejected."""
        with pytest.raises(ValidationError):
            GenerationRequest(turns=[])

    def test_rejects_empty_turn_text(self):
        """Turn text must be non-empty."""
        with pytest.raises(ValidationError):
            GenerationRequest.from_prompt("")

    def test_rejects_unknown_role(self):
        """Only user and model roles are allowed."""
        with pytest.raises(ValidationError):
            ConversationTurn(role="assistant", text="Hi")

    def test_request_is_immutable(self):
        """Requests cannot be modified after construction."""
        request = GenerationRequest.from_prompt("Hi")
        with pytest.raises(ValidationError):
            request.system_instruction = "changed"


class TestWireFormat:
    """Tests for the HTTP request the client sends."""

    @pytest.mark.asyncio
    async def test_posts_to_model_endpoint_with_key(self):
        """The request should hit <base>/<model>:generateContent?key=..."""
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={})

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = GeminiClient(
            api_key="secret-key",
            base_url="https://gemini.test/v1beta/models/",
            http_client=http_client,
        )
        request = GenerationRequest.from_prompt("Hello", system_instruction="Be brief")

        await client.send("gemini-2.5-flash", request)

        sent = captured[0]
        assert sent.method == "POST"
        assert sent.url.host == "gemini.test"
        assert sent.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
        assert sent.url.params["key"] == "secret-key"
        assert sent.headers["content-type"] == "application/json"
        assert json.loads(sent.content) == request.to_payload()
        await http_client.aclose()

    def test_endpoint_url_strips_trailing_slash(self):
        """Base URLs with or without a trailing slash join the same way."""
        client = GeminiClient(api_key="k", base_url="https://gemini.test/models/")
        assert client.endpoint_url("m") == "https://gemini.test/models/m:generateContent"

    @pytest.mark.asyncio
    async def test_http_failure_includes_endpoint_message(self, make_client):
        """The endpoint's error message is folded into the failure text."""
        body = {"error": {"code": 400, "message": "API key not valid."}}
        client = make_client(lambda request: httpx.Response(400, json=body))

        outcome = await client.generate("gemini-test", GenerationRequest.from_prompt("Hi"))

        assert isinstance(outcome, GenerationFailure)
        assert outcome.message == "API failed with status: 400 (API key not valid.)"


class TestResponseParsing:
    """Tests for parse_generation_response."""

    def test_missing_candidates_is_empty_success(self):
        """No candidates should yield empty text and no sources."""
        assert parse_generation_response({}) == GenerationResult(text="", sources=[])

    def test_empty_candidates_list(self):
        """An empty candidates list is not an error."""
        assert parse_generation_response({"candidates": []}).text == ""

    def test_candidate_without_text(self):
        """A candidate with no parts yields empty text."""
        body = {
            "candidates": [
                {
                    "content": {"parts": []},
                    "groundingMetadata": {
                        "groundingAttributions": [_attribution("https://a.test", "A")]
                    },
                }
            ]
        }
        result = parse_generation_response(body)
        assert result.text == ""
        assert result.sources == []

    def test_extracts_first_candidate_text(self):
        """Only the first candidate's first part is used."""
        body = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
                {"content": {"parts": [{"text": "other"}]}},
            ]
        }
        assert parse_generation_response(body).text == "first"

    def test_filters_incomplete_attributions_in_order(self):
        """Attributions missing uri or title are dropped; order is kept."""
        body = {
            "candidates": [
                {
                    "content": {"parts": [{"text": "Answer"}]},
                    "groundingMetadata": {
                        "groundingAttributions": [
                            _attribution("https://one.test", "One"),
                            _attribution("https://broken.test", None),
                            _attribution("https://two.test", "Two"),
                        ]
                    },
                }
            ]
        }

        result = parse_generation_response(body)

        assert result.text == "Answer"
        assert result.sources == [
            Source(uri="https://one.test", title="One"),
            Source(uri="https://two.test", title="Two"),
        ]

    def test_drops_empty_and_webless_attributions(self):
        """Empty strings and attributions without web data are skipped."""
        body = {
            "candidates": [
                {
                    "content": {"parts": [{"text": "Answer"}]},
                    "groundingMetadata": {
                        "groundingAttributions": [
                            _attribution("", "Empty uri"),
                            {"segment": {}},
                            _attribution("https://ok.test", "Ok"),
                        ]
                    },
                }
            ]
        }
        assert parse_generation_response(body).sources == [Source(uri="https://ok.test", title="Ok")]

    def test_non_object_body_is_malformed(self):
        """A JSON array body is not a generateContent response."""
        with pytest.raises(MalformedResponse):
            parse_generation_response([{"candidates": []}])
