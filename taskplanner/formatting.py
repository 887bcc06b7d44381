"""
Breakdown formatting for the terminal.
"""

from taskplanner.core.types import Breakdown


def format_breakdown(breakdown: Breakdown) -> str:
    """Render a breakdown as indented plain text."""
    blocks = [f"Task: {breakdown.task_description}"]

    for step in breakdown.steps:
        lines = [f"Step {step.id}: {step.title}", f"  {step.description}"]
        if step.files:
            lines.append("  Files:")
            lines.extend(f"    - {path}" for path in step.files)
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)
