# repochat/llm/gemini.py
"""
Gemini completion client (generateContent REST endpoint) over httpx.

Request:
    POST {base_url}/models/{model}:generateContent
    {"contents": [{"parts": [{"text": prompt}]}], "generationConfig": {...}}

Response classification:
    candidates[0].content.parts[0].text   -> OK
    promptFeedback.blockReason            -> BLOCKED
    non-2xx                               -> HTTP_ERROR (error.message)
    httpx.HTTPError / bad JSON            -> TRANSPORT_ERROR
    anything else                         -> EMPTY
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from repochat.core.config.schema import LLMConfig
from repochat.exceptions import CompletionServiceError
from repochat.llm.base import CompletionResult
from repochat.logging.logger import get_logger
from repochat.logging.tags import LLM

logger = get_logger(__name__)


class GeminiCompletionClient:
    """
    Gemini generateContent client.

    Usage:
        client = GeminiCompletionClient(api_key="...", model="gemini-1.5-flash-latest")
        result = client.complete("Summarize ...")
        print(result.display_text)
    """

    plugin_name = "gemini"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = "gemini-1.5-flash-latest",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["x-goog-api-key"] = api_key
        else:
            logger.warning(f"{LLM} No Gemini API key configured; requests will be rejected")

        self.client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, cfg: LLMConfig, **kwargs: Any) -> "GeminiCompletionClient":
        return cls(
            api_key=cfg.api_key,
            model=cfg.model,
            base_url=cfg.base_url,
            timeout=cfg.timeout,
            temperature=cfg.temperature,
            max_output_tokens=cfg.max_output_tokens,
            **kwargs,
        )

    def _payload(self, prompt: str) -> dict[str, Any]:
        generation_config: dict[str, Any] = {}
        if self.temperature is not None:
            generation_config["temperature"] = self.temperature
        if self.max_output_tokens is not None:
            generation_config["maxOutputTokens"] = self.max_output_tokens
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    def _post(self, prompt: str) -> httpx.Response:
        try:
            return self.client.post(
                f"/models/{self.model}:generateContent",
                json=self._payload(prompt),
            )
        except httpx.HTTPError as e:
            raise CompletionServiceError(str(e) or type(e).__name__) from e

    def complete(self, prompt: str) -> CompletionResult:
        """Send one prompt. Never raises."""
        logger.debug(f"{LLM} Sending {len(prompt)} chars to {self.model}")

        try:
            response = self._post(prompt)
            data = _json_body(response)
        except CompletionServiceError as e:
            logger.error(f"{LLM} Error calling Gemini API: {e}")
            return CompletionResult.transport_error(str(e))

        if not response.is_success:
            message = _extract_path(data, "error.message") or "Unknown error"
            logger.error(f"{LLM} Gemini API returned {response.status_code}: {message}")
            return CompletionResult.http_error(response.status_code, str(message))

        text = _extract_path(data, "candidates.0.content.parts.0.text")
        if isinstance(text, str) and text:
            return CompletionResult.success(text)

        reason = _extract_path(data, "promptFeedback.blockReason")
        if reason:
            detail = str(reason)
            reason_message = _extract_path(data, "promptFeedback.blockReasonMessage")
            if reason_message:
                detail += f" - {reason_message}"
            logger.warning(f"{LLM} Gemini API prompt blocked: {detail}")
            return CompletionResult.blocked_by(detail)

        logger.warning(f"{LLM} No response or unexpected format from Gemini API")
        return CompletionResult.empty()

    def close(self) -> None:
        self.client.close()


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        if response.is_success:
            raise CompletionServiceError(f"Invalid JSON in response: {e}") from e
        # error pages are often HTML; keep the status and drop the body
        return {}


def _extract_path(data: Any, path: str, default: Any = None) -> Any:
    """Extract value from nested dicts/lists using dot notation."""
    current = data
    for part in path.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return default
        else:
            return default
    return current
