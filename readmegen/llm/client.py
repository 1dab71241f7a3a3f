"""HTTP client for OpenAI-compatible chat-completion endpoints."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urljoin
from urllib.request import Request, urlopen

from ..config import DEFAULT_MAX_TOKENS, AIConfig
from ..logging import get_logger

NO_CONTENT = "No README generated."

logger = get_logger("llm")


class LLMError(RuntimeError):
    """Raised when the chat-completion call fails."""


@dataclass
class ChatRequest:
    """A single-message chat-completion request."""

    url: str
    api_key: Optional[str]
    model: str
    prompt: str
    max_tokens: int
    timeout: float

    def payload(self) -> dict[str, object]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": self.prompt}],
            "max_tokens": self.max_tokens,
        }


class ChatClient:
    """Sends prompts to the configured provider and returns the completion text."""

    def __init__(
        self,
        config: AIConfig,
        *,
        transport: Callable[[ChatRequest], dict[str, object]] | None = None,
    ) -> None:
        if not config.model or not config.chat_endpoint:
            raise LLMError("AI configuration requires a model and a chat endpoint.")
        self.config = config
        self.url = urljoin(config.base_uri or "", config.chat_endpoint)
        self._transport = transport or _http_transport

    def complete(self, prompt: str) -> str:
        """Return the first choice's message content, or a placeholder when empty."""
        request = ChatRequest(
            url=self.url,
            api_key=self.config.api_key,
            model=self.config.model or "",
            prompt=prompt,
            max_tokens=self.config.max_tokens or DEFAULT_MAX_TOKENS,
            timeout=self.config.request_timeout or 60.0,
        )
        logger.debug("Requesting completion from %s with model %s", request.url, request.model)
        payload = self._transport(request)
        content = extract_content(payload)
        if not content:
            logger.warning("Provider returned no completion text")
            return NO_CONTENT
        return content


def extract_content(payload: dict[str, object]) -> str:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str):
            return content
    return ""


def _http_transport(request: ChatRequest) -> dict[str, object]:
    data = json.dumps(request.payload()).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if request.api_key:
        headers["Authorization"] = f"Bearer {request.api_key}"

    http_request = Request(request.url, data=data, headers=headers, method="POST")
    try:
        with urlopen(http_request, timeout=request.timeout) as response:
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore")
        message = detail.strip() or exc.reason
        raise LLMError(f"Chat completion failed with status {exc.code}: {message}") from exc
    except URLError as exc:
        raise LLMError(f"Chat completion request failed: {exc.reason}") from exc

    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LLMError("Chat completion endpoint returned invalid JSON") from exc
    if not isinstance(payload, dict):
        raise LLMError("Chat completion endpoint returned an unexpected payload")
    return payload


__all__ = ["ChatClient", "ChatRequest", "LLMError", "NO_CONTENT", "extract_content"]
