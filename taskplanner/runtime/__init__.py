"""
Runtime Module

Assembly of strategies from configuration.
"""

from taskplanner.runtime.factory import STRATEGY_NAMES, create_strategy

__all__ = ["STRATEGY_NAMES", "create_strategy"]
