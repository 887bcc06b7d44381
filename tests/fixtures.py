"""
Test Fixtures

Fakes and payload builders shared by the test modules.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx

from taskplanner.config.settings import StrategyConfig
from taskplanner.core.types import Breakdown, LLMResponse, Message, Step, TaskDescriptor
from taskplanner.reasoning.llm.base import BaseLLMAdapter, RetryPolicy
from taskplanner.reasoning.strategies.base import BreakdownStrategy


def make_config(**overrides: Any) -> StrategyConfig:
    values: dict[str, Any] = {
        "api_key": "test-key",
        "model": "test-model",
        "base_url": "https://llm.test/openai/v1",
    }
    values.update(overrides)
    return StrategyConfig(**values)


def steps_json(count: int = 3, **extra: Any) -> str:
    steps = [
        {
            "id": i,
            "title": f"Step title {i}",
            "description": f"Step description {i}",
            "files": [f"src/file{i}.ts"],
        }
        for i in range(1, count + 1)
    ]
    return json.dumps({"steps": steps, **extra})


def completion_payload(content: str | None) -> dict[str, Any]:
    """An OpenAI-compatible chat.completion body."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 34, "total_tokens": 46},
    }


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedTransport:
    """
    httpx handler replaying a list of outcomes.

    Each outcome is an httpx.Response, a JSON-able dict (sent with 200)
    or an exception to raise.
    """

    def __init__(self, outcomes: list[Any]):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(200, json=outcome)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    @property
    def calls(self) -> int:
        return len(self.requests)


def error_response(status: int, message: str = "boom") -> httpx.Response:
    return httpx.Response(status, json={"error": {"message": message, "type": "test_error"}})


class ScriptedAdapter(BaseLLMAdapter):
    """Adapter whose single attempts are scripted; retries come from the base class."""

    provider_name = "scripted"

    def __init__(
        self,
        config: StrategyConfig,
        outcomes: list[Any],
        retry_policy: RetryPolicy | None = None,
    ):
        super().__init__(config, retry_policy)
        self.outcomes = list(outcomes)
        self.calls = 0
        self.received: list[list[Message]] = []
        self.closed = False

    async def _do_complete(self, messages, *, model=None, **kwargs) -> LLMResponse:
        self.calls += 1
        self.received.append(messages)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, Callable):
            return await outcome()
        return LLMResponse(content=outcome)

    async def close(self) -> None:
        self.closed = True


class StaticStrategy(BreakdownStrategy):
    """Returns a fixed one-step breakdown and records what it was asked."""

    def __init__(self):
        self.seen: list[TaskDescriptor] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "static"

    async def analyze(self, task: TaskDescriptor) -> Breakdown:
        self.seen.append(task)
        return Breakdown(
            task_description=task.description,
            steps=(Step(id=1, title="Only step", description="Do the thing"),),
        )

    async def close(self) -> None:
        self.closed = True
