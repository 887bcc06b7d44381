"""
Analyzer

The single entry point callers use to get a breakdown. It holds one
strategy (TemplateStrategy unless another is injected) and forwards to
it. No translation of results or errors happens here.
"""

from taskplanner.core.types import Breakdown, TaskDescriptor
from taskplanner.reasoning.strategies.base import BreakdownStrategy
from taskplanner.reasoning.strategies.template import TemplateStrategy


class Analyzer:
    """Dependency-injection point between callers and concrete strategies."""

    def __init__(self, strategy: BreakdownStrategy | None = None):
        self._strategy = strategy or TemplateStrategy()

    @property
    def strategy(self) -> BreakdownStrategy:
        return self._strategy

    async def run(self, task: TaskDescriptor) -> Breakdown:
        return await self._strategy.analyze(task)
