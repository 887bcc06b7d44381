"""
LLM Strategy

AI-generated breakdowns from a remote chat-completion model (Groq).

Unlike TemplateStrategy, the steps come from the model. The reply is
validated into the same Breakdown shape, so the two strategies are
interchangeable behind the Analyzer.

Design decisions:
- Configuration is resolved once, at construction, and never re-read
- A missing API key fails construction, not the first request
- Only transport failures are retried; a bad reply fails immediately
"""

from taskplanner.config.settings import StrategyConfig, load_strategy_config
from taskplanner.core.exceptions import (
    AuthenticationFailedError,
    ConfigurationError,
    RateLimitExceededError,
    TransientTransportError,
    TransportError,
)
from taskplanner.core.types import Breakdown, Message, MessageRole, TaskDescriptor
from taskplanner.observability.logging import get_logger
from taskplanner.reasoning.llm.base import BaseLLMAdapter
from taskplanner.reasoning.llm.groq_adapter import GroqAdapter
from taskplanner.reasoning.prompts.template import PromptRegistry
from taskplanner.reasoning.response_parser import parse_steps
from taskplanner.reasoning.strategies.base import BreakdownStrategy

logger = get_logger("taskplanner.strategies.llm")

MIN_STEPS = 3
MAX_STEPS = 7
JSON_RESPONSE_FORMAT = {"type": "json_object"}

_AUTH_MARKERS = ("api key", "api_key", "unauthorized", "invalid authentication")
_RATE_LIMIT_MARKERS = ("rate limit", "rate_limit", "too many requests")


def relabel_transport_error(error: TransportError) -> TransportError:
    """
    Map auth and rate-limit failures onto their user-legible errors.

    Transient errors and anything else are returned unchanged.
    """
    if isinstance(error, (AuthenticationFailedError, RateLimitExceededError, TransientTransportError)):
        return error

    text = error.message.lower()
    if error.status_code in (401, 403) or any(m in text for m in _AUTH_MARKERS):
        return AuthenticationFailedError(
            "Groq API authentication failed. Check your GROQ_API_KEY.",
            status_code=error.status_code,
            cause=error,
        )
    if error.status_code == 429 or any(m in text for m in _RATE_LIMIT_MARKERS):
        return RateLimitExceededError(
            "Groq API rate limit exceeded. Please try again later.",
            status_code=error.status_code,
            cause=error,
        )
    return error


class LLMStrategy(BreakdownStrategy):
    """
    Remote-model breakdown strategy.

    Safe to share between concurrent calls: the only state is the
    immutable configuration and the HTTP client.
    """

    def __init__(
        self,
        config: StrategyConfig | None = None,
        *,
        adapter: BaseLLMAdapter | None = None,
        prompts: PromptRegistry | None = None,
    ):
        self._config = config if config is not None else load_strategy_config()

        if not self._config.has_api_key:
            raise ConfigurationError(
                "Groq API key is required. Set GROQ_API_KEY environment variable "
                "or add it to analyzer.config.json"
            )

        self._adapter = adapter or GroqAdapter(self._config)
        self._prompts = prompts or PromptRegistry()

    @property
    def name(self) -> str:
        return "llm"

    @property
    def config(self) -> StrategyConfig:
        return self._config

    def build_messages(self, task: TaskDescriptor) -> list[Message]:
        """System role plus the user section describing the task."""
        return [
            Message(
                role=MessageRole.SYSTEM,
                content=self._prompts.render("breakdown_system"),
            ),
            Message(
                role=MessageRole.USER,
                content=self._prompts.render(
                    "breakdown_user",
                    description=task.description,
                    category=task.category.value,
                    scope=task.scope,
                    min_steps=MIN_STEPS,
                    max_steps=MAX_STEPS,
                ),
            ),
        ]

    async def analyze(self, task: TaskDescriptor) -> Breakdown:
        """
        Ask the remote model for a breakdown of ``task``.

        Raises:
            AuthenticationFailedError: credential rejected
            RateLimitExceededError: provider throttled the request
            TransportError: other transport failure (after retries if transient)
            ResponseShapeError: reply missing, not JSON or invalid
            EmptyResultError: reply had an empty ``steps`` array
        """
        messages = self.build_messages(task)

        with logger.context(strategy=self.name, model=self._config.model):
            logger.info("Requesting breakdown", category=task.category.value)

            try:
                response = await self._adapter.complete(
                    messages,
                    response_format=JSON_RESPONSE_FORMAT,
                )
            except TransportError as e:
                relabeled = relabel_transport_error(e)
                if relabeled is e:
                    raise
                raise relabeled from e

            steps = parse_steps(response.content)

            logger.info(
                "Received breakdown",
                steps=len(steps),
                attempts=response.attempts,
                latency_ms=round(response.latency_ms, 1),
            )

        return Breakdown(task_description=task.description, steps=tuple(steps))

    async def close(self) -> None:
        await self._adapter.close()
