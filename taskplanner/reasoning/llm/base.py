"""
Base LLM Adapter

Defines the abstract interface for chat-completion providers and the
retry loop wrapped around every request.

Design decisions:
- Async-first: requests are awaited, one attempt in flight at a time
- Retry policy is explicit data: a classification function deciding
  which errors are transient and a backoff function mapping attempt
  number to delay, both injectable for tests
- Per-attempt timeout; no caller-side cancellation
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from taskplanner.config.settings import StrategyConfig
from taskplanner.core.exceptions import TransientTransportError
from taskplanner.core.types import LLMResponse, Message
from taskplanner.observability.logging import get_logger

logger = get_logger("taskplanner.llm")


def is_transient(error: Exception) -> bool:
    """5xx, timeouts and network failures are worth retrying; nothing else is."""
    return isinstance(error, TransientTransportError)


def exponential_backoff(attempt: int, base_delay: float = 1.0) -> float:
    """Delay before retry ``attempt`` (1-based): 2s, 4s, 8s... for base 1."""
    return base_delay * (2**attempt)


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to retry, which errors qualify and how long to wait."""

    max_retries: int = 3
    is_retryable: Callable[[Exception], bool] = is_transient
    backoff: Callable[[int], float] = exponential_backoff
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio.sleep, repr=False)

    @classmethod
    def from_config(cls, config: StrategyConfig, **overrides: Any) -> "RetryPolicy":
        values: dict[str, Any] = {
            "max_retries": config.max_retries,
            "backoff": lambda attempt: exponential_backoff(attempt, config.retry_delay),
        }
        values.update(overrides)
        return cls(**values)


async def call_with_retry(
    operation: Callable[[], Awaitable[Any]],
    policy: RetryPolicy,
) -> tuple[Any, int]:
    """
    Run ``operation`` until it succeeds, fails terminally or the budget runs out.

    Returns the result and the number of attempts made. After the last
    allowed retry the final error propagates unchanged.
    """
    attempt = 0
    while True:
        try:
            return await operation(), attempt + 1
        except Exception as e:
            if not policy.is_retryable(e) or attempt >= policy.max_retries:
                raise

            attempt += 1
            delay = policy.backoff(attempt)
            logger.warning(
                f"Retrying request (attempt {attempt}/{policy.max_retries}) after {delay:g}s",
                reason=str(e),
            )
            await policy.sleep(delay)


class BaseLLMAdapter(ABC):
    """
    Abstract base class for chat-completion providers.

    Subclasses implement one attempt in ``_do_complete``; ``complete``
    adds the timeout and retry handling.
    """

    def __init__(self, config: StrategyConfig, retry_policy: RetryPolicy | None = None):
        self.config = config
        self.retry_policy = retry_policy or RetryPolicy.from_config(config)
        self._timeout = config.timeout

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @abstractmethod
    async def _do_complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Provider-specific single attempt.

        Must raise TransientTransportError for 5xx and network failures and
        TerminalTransportError for 4xx. Implementations should NOT retry.
        """
        pass

    async def _attempt(self, messages: list[Message], **kwargs: Any) -> LLMResponse:
        try:
            return await asyncio.wait_for(
                self._do_complete(messages, **kwargs),
                timeout=self._timeout,
            )
        except TimeoutError as e:
            raise TransientTransportError(
                f"Request timed out after {self._timeout:g}s", cause=e
            )

    async def complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Send a completion request, retrying transient failures.

        Raises:
            TransientTransportError: still failing after the retry budget
            TerminalTransportError: 4xx response, not retried
        """
        start_time = time.perf_counter()

        response, attempts = await call_with_retry(
            lambda: self._attempt(messages, model=model, **kwargs),
            self.retry_policy,
        )

        return response.model_copy(
            update={
                "attempts": attempts,
                "latency_ms": (time.perf_counter() - start_time) * 1000,
            }
        )

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (connection pools, etc)."""
        pass

    async def __aenter__(self) -> "BaseLLMAdapter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
