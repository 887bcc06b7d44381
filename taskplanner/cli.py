"""Command line interface for :mod:`taskplanner`.

Uses `Typer` to take a task description and print its breakdown:

    taskplanner "Add authentication to the app"
    taskplanner --llm --json "Create CRUD endpoints for products"
"""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer

from taskplanner.config.settings import get_settings
from taskplanner.core.exceptions import TaskPlannerError
from taskplanner.core.types import Breakdown
from taskplanner.formatting import format_breakdown
from taskplanner.observability.logging import LogLevel, configure_logging
from taskplanner.planning.analyzer import Analyzer
from taskplanner.planning.classifier import classify
from taskplanner.runtime.factory import create_strategy

app = typer.Typer(add_completion=False, help="Break a development task into actionable steps")


async def _run(description: str, strategy_name: str, config_path: Optional[Path]) -> Breakdown:
    strategy = create_strategy(strategy_name, config_path=config_path)
    async with strategy:
        return await Analyzer(strategy).run(classify(description))


@app.command()
def main(
    description: Optional[List[str]] = typer.Argument(None, help="Task description"),
    llm: Optional[bool] = typer.Option(
        None,
        "--llm/--template",
        help="Use the remote language model instead of the built-in templates",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the breakdown as JSON"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to analyzer config JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Classify DESCRIPTION and print its step-by-step breakdown."""
    try:
        settings = get_settings()
    except TaskPlannerError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    configure_logging(
        LogLevel.DEBUG if verbose else settings.log_level,
        json_output=settings.log_format == "json",
    )

    text = " ".join(description or []).strip()
    if not text:
        typer.echo("Usage: taskplanner <task description>", err=True)
        typer.echo('Example: taskplanner "Add authentication to the app"', err=True)
        raise typer.Exit(code=1)

    if llm is None:
        strategy_name = settings.default_strategy
    else:
        strategy_name = "llm" if llm else "template"

    try:
        breakdown = asyncio.run(_run(text, strategy_name, config or settings.config_file))
    except TaskPlannerError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(breakdown.model_dump_json(by_alias=True, indent=2))
    else:
        typer.echo(format_breakdown(breakdown))


if __name__ == "__main__":  # pragma: no cover
    app()
