"""
taskplanner - break software-development tasks into actionable steps

Classifies a free-text task and produces an ordered list of steps, either
from fixed per-category templates or from a remote language model.
"""

__version__ = "0.1.0"
