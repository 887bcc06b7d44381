"""
Strategy Factory

Builds a breakdown strategy from its name, the way the CLI selects one.
"""

from pathlib import Path

from taskplanner.config.settings import StrategyConfig, load_strategy_config
from taskplanner.core.exceptions import ConfigurationError
from taskplanner.reasoning.strategies.base import BreakdownStrategy
from taskplanner.reasoning.strategies.llm import LLMStrategy
from taskplanner.reasoning.strategies.template import TemplateStrategy

STRATEGY_NAMES = ("template", "llm")


def create_strategy(
    name: str = "template",
    *,
    config: StrategyConfig | None = None,
    config_path: str | Path | None = None,
) -> BreakdownStrategy:
    """
    Create a strategy by name.

    Args:
        name: "template" or "llm"
        config: Explicit remote-model configuration (llm only)
        config_path: Static config file to load when ``config`` is omitted

    Raises:
        ConfigurationError: unknown name, or llm without an API key
    """
    if name == "template":
        return TemplateStrategy()

    if name == "llm":
        if config is None:
            config = load_strategy_config(config_path)
        return LLMStrategy(config)

    raise ConfigurationError(
        f"Unknown strategy {name!r}; expected one of {', '.join(STRATEGY_NAMES)}",
        context={"strategy": name},
    )
