"""
Planning Module

Task classification and the analyzer that runs a breakdown strategy.
"""

from taskplanner.planning.analyzer import Analyzer
from taskplanner.planning.classifier import classify, detect_category, extract_scope

__all__ = [
    "Analyzer",
    "classify",
    "detect_category",
    "extract_scope",
]
