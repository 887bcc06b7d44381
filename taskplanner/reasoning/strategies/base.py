"""
Base Breakdown Strategy

Defines the interface every breakdown strategy implements.

Design decisions:
- Strategy pattern for swappable breakdown approaches
- Async contract for all strategies, so callers always await and never
  branch on which concrete strategy they hold
- Strategies keep no task state between calls; only static configuration
"""

from abc import ABC, abstractmethod

from taskplanner.core.types import Breakdown, TaskDescriptor


class BreakdownStrategy(ABC):
    """
    Abstract base for breakdown strategies.

    Implementations must not mutate the task and must either return a
    Breakdown with at least one step or raise a TaskPlannerError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy identifier."""
        pass

    @abstractmethod
    async def analyze(self, task: TaskDescriptor) -> Breakdown:
        """Produce an ordered step list for ``task``."""
        pass

    async def close(self) -> None:
        """Release resources held by the strategy."""

    async def __aenter__(self) -> "BreakdownStrategy":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
