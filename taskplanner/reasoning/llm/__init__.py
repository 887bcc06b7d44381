"""
LLM Module

Chat-completion adapters and the retry policy around them.
"""

from taskplanner.reasoning.llm.base import (
    BaseLLMAdapter,
    RetryPolicy,
    call_with_retry,
    exponential_backoff,
    is_transient,
)
from taskplanner.reasoning.llm.groq_adapter import GroqAdapter

__all__ = [
    "BaseLLMAdapter",
    "GroqAdapter",
    "RetryPolicy",
    "call_with_retry",
    "exponential_backoff",
    "is_transient",
]
