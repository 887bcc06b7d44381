"""
Breakdown Strategies

Interchangeable ways of turning a TaskDescriptor into a Breakdown.
"""

from taskplanner.reasoning.strategies.base import BreakdownStrategy
from taskplanner.reasoning.strategies.llm import LLMStrategy
from taskplanner.reasoning.strategies.template import TemplateStrategy, sanitize_slug

__all__ = [
    "BreakdownStrategy",
    "LLMStrategy",
    "TemplateStrategy",
    "sanitize_slug",
]
