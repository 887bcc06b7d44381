"""
Exception Hierarchy

Defines all exceptions raised by taskplanner.
Exceptions carry structured context, not just messages, so the CLI can
print them and callers can handle them programmatically by code.
"""

from typing import Any


class TaskPlannerError(Exception):
    """
    Base exception for all taskplanner errors.

    Provides structured error information including:
    - Human-readable message
    - Machine-readable error code
    - Additional context for debugging
    """

    error_code: str = "TASKPLANNER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.error_code
        self.context = context or {}
        self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for JSON output."""
        return {
            "error": self.code,
            "message": self.message,
            "context": self.context,
        }


# ============================================================
# Configuration Errors
# ============================================================

class ConfigurationError(TaskPlannerError):
    """Missing or invalid configuration."""

    error_code = "CONFIGURATION_ERROR"


# ============================================================
# Remote Model Errors
# ============================================================

class LLMError(TaskPlannerError):
    """Base error for remote-model issues."""

    error_code = "LLM_ERROR"


class TransportError(LLMError):
    """The completion request did not produce a usable HTTP response."""

    error_code = "TRANSPORT_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class TransientTransportError(TransportError):
    """5xx response, timeout or network failure. Retried with backoff."""

    error_code = "TRANSIENT_TRANSPORT_ERROR"


class TerminalTransportError(TransportError):
    """4xx response. Never retried."""

    error_code = "TERMINAL_TRANSPORT_ERROR"


class AuthenticationFailedError(TerminalTransportError):
    """Provider rejected the credential."""

    error_code = "AUTHENTICATION_FAILED"


class RateLimitExceededError(TerminalTransportError):
    """Provider refused the request because of rate limiting."""

    error_code = "RATE_LIMIT_EXCEEDED"


class ResponseShapeError(LLMError):
    """Model reply is missing, unparsable or structurally invalid."""

    error_code = "RESPONSE_SHAPE_ERROR"


class EmptyResponseError(ResponseShapeError):
    """First choice carried no message content."""

    error_code = "EMPTY_RESPONSE"


class MalformedResponseError(ResponseShapeError):
    """Message content is not valid JSON."""

    error_code = "MALFORMED_RESPONSE"


# ============================================================
# Planning Errors
# ============================================================

class PlanningError(TaskPlannerError):
    """Base error for breakdown problems."""

    error_code = "PLANNING_ERROR"


class EmptyResultError(PlanningError):
    """A strategy would have produced zero steps."""

    error_code = "EMPTY_RESULT"
