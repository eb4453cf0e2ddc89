# tests/test_gemini_client.py
"""Tests for repochat.llm.gemini using httpx.MockTransport."""

import json

import httpx
import pytest

from repochat.core.config.schema import LLMConfig
from repochat.llm.base import CompletionResult, CompletionService, CompletionStatus
from repochat.llm.gemini import GeminiCompletionClient
from repochat.llm.registry import (
    COMPLETION_REGISTRY,
    get_completion_service,
    register_completion_provider,
)


def _client(handler, **kwargs) -> GeminiCompletionClient:
    return GeminiCompletionClient(
        api_key="test-key",
        model="gemini-test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _ok(text):
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


class TestRequest:
    def test_posts_prompt_to_generate_content(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return _ok("done")

        _client(handler).complete("Summarize this")

        assert seen["url"].endswith("/models/gemini-test:generateContent")
        assert seen["key"] == "test-key"
        assert seen["body"]["contents"] == [{"parts": [{"text": "Summarize this"}]}]
        assert seen["body"]["generationConfig"] == {}

    def test_generation_config(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return _ok("done")

        _client(handler, temperature=0.2, max_output_tokens=256).complete("x")

        assert seen["body"]["generationConfig"] == {"temperature": 0.2, "maxOutputTokens": 256}


class TestClassification:
    def test_success(self):
        result = _client(lambda r: _ok("This file defines the app.")).complete("p")

        assert result.ok
        assert result.display_text == "This file defines the app."

    def test_blocked(self):
        def handler(request):
            return httpx.Response(
                200,
                json={"promptFeedback": {"blockReason": "SAFETY", "blockReasonMessage": "unsafe"}},
            )

        result = _client(handler).complete("p")

        assert result.blocked
        assert result.display_text == "Content blocked by API: SAFETY - unsafe"

    def test_http_error_uses_provider_message(self):
        def handler(request):
            return httpx.Response(400, json={"error": {"code": 400, "message": "API key not valid."}})

        result = _client(handler).complete("p")

        assert result.status is CompletionStatus.HTTP_ERROR
        assert result.display_text == (
            "Error communicating with AI: Gemini API request failed with status 400: API key not valid."
        )

    def test_http_error_without_json_body(self):
        result = _client(lambda r: httpx.Response(502, text="<html>Bad gateway</html>")).complete("p")

        assert result.display_text == (
            "Error communicating with AI: Gemini API request failed with status 502: Unknown error"
        )

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = _client(handler).complete("p")

        assert result.status is CompletionStatus.TRANSPORT_ERROR
        assert result.display_text == "Error communicating with AI: connection refused"

    def test_invalid_json_on_success(self):
        result = _client(lambda r: httpx.Response(200, text="not json")).complete("p")

        assert result.status is CompletionStatus.TRANSPORT_ERROR
        assert result.display_text.startswith("Error communicating with AI: Invalid JSON")

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
            {"candidates": [{"finishReason": "MAX_TOKENS"}]},
        ],
    )
    def test_unexpected_format(self, body):
        result = _client(lambda r: httpx.Response(200, json=body)).complete("p")

        assert result.status is CompletionStatus.EMPTY
        assert result.display_text == "No valid response or unexpected format from AI."


class TestRegistry:
    def test_builds_gemini_from_config(self):
        service = get_completion_service(
            LLMConfig(api_key="k", model="gemini-x"),
            transport=httpx.MockTransport(lambda r: _ok("hi")),
        )

        assert isinstance(service, GeminiCompletionClient)
        assert isinstance(service, CompletionService)
        assert service.complete("p") == CompletionResult.success("hi")

    def test_register_provider(self, monkeypatch):
        monkeypatch.setattr("repochat.llm.registry.COMPLETION_REGISTRY", dict(COMPLETION_REGISTRY))
        canned = CompletionResult.success("local")

        class LocalService:
            def complete(self, prompt):
                return canned

        register_completion_provider("local", lambda cfg, **kwargs: LocalService())

        assert get_completion_service(LLMConfig(provider="local")).complete("p") is canned
        with pytest.raises(ValueError, match="already registered"):
            register_completion_provider("local", lambda cfg: LocalService())

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown completion provider"):
            get_completion_service(LLMConfig(provider="nope"))
