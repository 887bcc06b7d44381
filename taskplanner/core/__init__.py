"""
Core Module

Shared types and the exception hierarchy.
"""

from taskplanner.core.exceptions import (
    AuthenticationFailedError,
    ConfigurationError,
    EmptyResponseError,
    EmptyResultError,
    LLMError,
    MalformedResponseError,
    PlanningError,
    RateLimitExceededError,
    ResponseShapeError,
    TaskPlannerError,
    TerminalTransportError,
    TransientTransportError,
    TransportError,
)
from taskplanner.core.types import (
    Breakdown,
    LLMResponse,
    Message,
    MessageRole,
    Step,
    TaskCategory,
    TaskDescriptor,
)

__all__ = [
    "AuthenticationFailedError",
    "Breakdown",
    "ConfigurationError",
    "EmptyResponseError",
    "EmptyResultError",
    "LLMError",
    "LLMResponse",
    "MalformedResponseError",
    "Message",
    "MessageRole",
    "PlanningError",
    "RateLimitExceededError",
    "ResponseShapeError",
    "Step",
    "TaskCategory",
    "TaskDescriptor",
    "TaskPlannerError",
    "TerminalTransportError",
    "TransientTransportError",
    "TransportError",
]
