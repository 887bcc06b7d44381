"""
Configuration Module

Application settings and remote-model strategy configuration.
"""

from taskplanner.config.settings import (
    DEFAULT_CONFIG_PATH,
    AppSettings,
    GroqEnvSettings,
    StrategyConfig,
    get_settings,
    load_strategy_config,
    read_config_file,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppSettings",
    "GroqEnvSettings",
    "StrategyConfig",
    "get_settings",
    "load_strategy_config",
    "read_config_file",
]
