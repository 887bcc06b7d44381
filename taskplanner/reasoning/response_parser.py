"""
Response Parser

Validates and coerces a remote model's JSON reply into Steps.

Any validation failure rejects the whole reply; partial breakdowns are
never returned. Non-string entries in ``files`` are dropped silently.
"""

import json
from typing import Any

from taskplanner.core.exceptions import (
    EmptyResponseError,
    EmptyResultError,
    MalformedResponseError,
    ResponseShapeError,
)
from taskplanner.core.types import Step
from taskplanner.observability.logging import get_logger

logger = get_logger("taskplanner.response_parser")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_text(raw: dict[str, Any], key: str, position: int) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ResponseShapeError(
            f"Step {position} missing valid '{key}' field",
            context={"step": position, "field": key},
        )
    return value.strip()


def parse_step(raw: Any, position: int) -> Step:
    """
    Validate one element of the ``steps`` array.

    The returned Step is numbered by ``position`` so ids are always 1..n.
    """
    if not isinstance(raw, dict):
        raise ResponseShapeError(
            f"Step {position} must be an object",
            context={"step": position},
        )

    if not _is_number(raw.get("id")):
        raise ResponseShapeError(
            f"Step {position} missing valid 'id' field",
            context={"step": position, "field": "id"},
        )

    title = _require_text(raw, "title", position)
    description = _require_text(raw, "description", position)

    files = raw.get("files")
    if not isinstance(files, list):
        raise ResponseShapeError(
            f"Step {position} 'files' must be an array",
            context={"step": position, "field": "files"},
        )

    if raw["id"] != position:
        logger.debug("Renumbered step", given=raw["id"], position=position)

    return Step(
        id=position,
        title=title,
        description=description,
        files=tuple(f for f in files if isinstance(f, str)),
    )


def parse_steps(content: str | None) -> list[Step]:
    """
    Parse the message content of a breakdown reply.

    Raises:
        EmptyResponseError: no content at all
        MalformedResponseError: content is not JSON
        ResponseShapeError: ``steps`` missing or an element invalid
        EmptyResultError: ``steps`` present but empty
    """
    if content is None or not content.strip():
        raise EmptyResponseError("Empty response from Groq API")

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Invalid JSON response from Groq: {e}", cause=e)

    steps = parsed.get("steps") if isinstance(parsed, dict) else None
    if not isinstance(steps, list):
        raise ResponseShapeError('Response missing "steps" array')

    if not steps:
        raise EmptyResultError("Response contains empty steps array")

    return [parse_step(raw, position) for position, raw in enumerate(steps, start=1)]
