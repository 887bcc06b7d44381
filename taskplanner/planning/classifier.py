"""
Task Classifier

Turns a free-text task description into a TaskDescriptor.

Categories are decided by an ordered keyword list where the first
matching rule wins. Descriptions mentioning both "fix" and "feature" are
FEATURE because the feature rule comes first; keep the order stable.
"""

import re

from taskplanner.core.types import TaskCategory, TaskDescriptor
from taskplanner.observability.logging import get_logger

logger = get_logger("taskplanner.classifier")


CATEGORY_RULES: tuple[tuple[TaskCategory, re.Pattern[str]], ...] = (
    (TaskCategory.CRUD, re.compile(r"\b(?:create|read|update|delete|crud)\b")),
    (TaskCategory.AUTHENTICATION, re.compile(r"auth(?:entication)?|login|logout|register|signup|signin")),
    (TaskCategory.REFACTOR, re.compile(r"refactor|restructure|clean up|improve code")),
    (TaskCategory.FEATURE, re.compile(r"feature|add|implement|support|enhance")),
    (TaskCategory.BUGFIX, re.compile(r"bug|fix|error|issue|defect|patch")),
)

_ENTITY_KINDS = r"function|file|class|module|component"

# "... in the payment service", "... for products", "... to the app"
_PREPOSITION_SCOPE = re.compile(r"\b(?:in|for|to)\s+([\w\s./-]+)", re.IGNORECASE)
# "function parseDate", "module billing.core"
_ENTITY_SCOPE = re.compile(rf"\b({_ENTITY_KINDS})\s+([\w./-]+)", re.IGNORECASE)
# "the payment module"
_TRAILING_ENTITY_SCOPE = re.compile(rf"\b([\w./-]+)\s+({_ENTITY_KINDS})\b", re.IGNORECASE)


def detect_category(text: str) -> TaskCategory:
    """Return the category of the first rule matching ``text``."""
    lower = text.lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(lower):
            return category
    return TaskCategory.OTHER


def extract_scope(text: str) -> str:
    """
    Extract the code area a task targets.

    Tries, in order: a preposition phrase, "<kind> <identifier>", then
    "<identifier> <kind>". Returns "" when nothing matches.
    """
    match = _PREPOSITION_SCOPE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()

    match = _ENTITY_SCOPE.search(text)
    if match:
        return f"{match.group(1)} {match.group(2)}"

    match = _TRAILING_ENTITY_SCOPE.search(text)
    if match:
        return f"{match.group(1)} {match.group(2)}"

    return ""


def classify(text: str) -> TaskDescriptor:
    """
    Classify a task description.

    Pure function of ``text``: the same input always gives the same
    descriptor. A missing scope is normal and yields "".
    """
    task = TaskDescriptor(
        description=text,
        category=detect_category(text),
        scope=extract_scope(text),
    )
    logger.debug("Classified task", category=task.category.value, scope=task.scope)
    return task
