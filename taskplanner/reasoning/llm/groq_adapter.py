"""
Groq LLM Adapter

Chat completions against Groq's OpenAI-compatible endpoint.

Design decisions:
- Uses the official openai library; the SDK's own retries are disabled
  because BaseLLMAdapter owns the retry policy
- SDK errors are translated into transient (5xx, network) and terminal
  (4xx) transport errors at this boundary
- The httpx client is injectable so tests can swap in a MockTransport
"""

from typing import Any

import httpx
import openai

from taskplanner.config.settings import StrategyConfig
from taskplanner.core.exceptions import (
    LLMError,
    TerminalTransportError,
    TransientTransportError,
)
from taskplanner.core.types import LLMResponse, Message
from taskplanner.reasoning.llm.base import BaseLLMAdapter, RetryPolicy


def _error_detail(error: openai.APIStatusError) -> str:
    body = error.body
    if isinstance(body, dict):
        # The SDK hands over either the "error" object or the whole body
        nested = body.get("error")
        if isinstance(nested, dict):
            body = nested
        if body.get("message"):
            return str(body["message"])
    return error.message or "Unknown error"


class GroqAdapter(BaseLLMAdapter):
    """Groq (OpenAI-compatible) chat-completion adapter."""

    def __init__(
        self,
        config: StrategyConfig,
        retry_policy: RetryPolicy | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(config, retry_policy)

        client_kwargs: dict[str, Any] = {
            "api_key": config.api_key.get_secret_value(),
            "base_url": config.base_url,
            "timeout": config.timeout,
            "max_retries": 0,  # We handle retries ourselves
        }
        if http_client is not None:
            client_kwargs["http_client"] = http_client

        self._client = openai.AsyncOpenAI(**client_kwargs)
        self._default_model = config.model

    @property
    def provider_name(self) -> str:
        return "groq"

    async def _do_complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        request_kwargs: dict[str, Any] = {
            "model": model or self._default_model,
            "messages": [m.to_dict() for m in messages],
        }
        # e.g. response_format={"type": "json_object"}
        request_kwargs.update(kwargs)

        try:
            response = await self._client.chat.completions.create(**request_kwargs)
        except openai.APIStatusError as e:
            message = f"Groq API error ({e.status_code}): {_error_detail(e)}"
            if e.status_code >= 500:
                raise TransientTransportError(message, status_code=e.status_code, cause=e)
            raise TerminalTransportError(message, status_code=e.status_code, cause=e)
        except openai.APIConnectionError as e:
            # Includes APITimeoutError
            raise TransientTransportError(
                f"Network error: Could not reach Groq API ({e})", cause=e
            )
        except openai.APIError as e:
            raise LLMError(f"Groq API request failed: {e}", cause=e)

        choices = getattr(response, "choices", None) or []
        if not choices:
            return LLMResponse(model=getattr(response, "model", None))

        choice = choices[0]
        message = getattr(choice, "message", None)
        usage = getattr(response, "usage", None)

        return LLMResponse(
            content=getattr(message, "content", None),
            model=getattr(response, "model", None),
            finish_reason=getattr(choice, "finish_reason", None),
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.close()
