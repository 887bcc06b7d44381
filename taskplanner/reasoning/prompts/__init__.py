"""
Prompt Templates

Versioned Jinja2 prompts for the remote breakdown strategy.
"""

from taskplanner.reasoning.prompts.template import (
    BREAKDOWN_SYSTEM,
    BREAKDOWN_USER,
    PromptRegistry,
    PromptTemplate,
)

__all__ = [
    "BREAKDOWN_SYSTEM",
    "BREAKDOWN_USER",
    "PromptRegistry",
    "PromptTemplate",
]
