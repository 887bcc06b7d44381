"""
Template Strategy

Deterministic breakdowns from fixed per-category step skeletons.

No I/O and no external calls. Each category has a generator that fills
its skeleton with the raw scope text (for titles and descriptions) and a
sanitized slug of it (for file paths). Every input, including an empty
description, yields a non-empty breakdown.
"""

import re
from collections.abc import Callable

from taskplanner.core.exceptions import EmptyResultError
from taskplanner.core.types import Breakdown, Step, TaskCategory, TaskDescriptor
from taskplanner.observability.logging import get_logger
from taskplanner.reasoning.strategies.base import BreakdownStrategy

logger = get_logger("taskplanner.strategies.template")

DEFAULT_SLUG = "scope"
OTHER_TOKEN_LIMIT = 20

# (title, description, files) before ids are assigned
StepDraft = tuple[str, str, list[str]]

_SEPARATORS = re.compile(r"[\s_]+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-{2,}")
_WORD = re.compile(r"\w+")


def sanitize_slug(text: str) -> str:
    """
    Render ``text`` as a filesystem-safe, lowercase, hyphenated slug.

    Idempotent. Falls back to "scope" when nothing survives.
    """
    slug = _SEPARATORS.sub("-", text.lower())
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHEN_RUNS.sub("-", slug).strip("-")
    return slug or DEFAULT_SLUG


def _crud_steps(scope: str, slug: str) -> list[StepDraft]:
    return [
        (
            f"Define {scope} data model",
            f"Create the {scope} model with its fields, types and constraints.",
            [f"src/models/{slug}.ts"],
        ),
        (
            f"Implement {scope} controller",
            f"Add create, read, update and delete handlers for {scope}.",
            [f"src/controllers/{slug}.controller.ts"],
        ),
        (
            f"Register {scope} routes",
            f"Expose the {scope} handlers through REST endpoints.",
            [f"src/routes/{slug}.routes.ts"],
        ),
        (
            f"Validate {scope} input",
            f"Reject malformed {scope} payloads before they reach the controller.",
            [f"src/validators/{slug}.validator.ts"],
        ),
        (
            f"Write tests for {scope} operations",
            f"Cover each CRUD operation on {scope}, including not-found and invalid input cases.",
            [f"tests/{slug}.test.ts"],
        ),
        (
            f"Document {scope} API",
            f"Describe the {scope} endpoints, request bodies and responses.",
            [f"docs/api/{slug}.md"],
        ),
    ]


def _authentication_steps(scope: str, slug: str) -> list[StepDraft]:
    # Authentication is a whole-system concern, so paths ignore the slug
    return [
        (
            "Create User model with password field",
            "Define a User model with a unique email and a password hash field.",
            ["src/models/user.ts"],
        ),
        (
            "Implement password hashing",
            "Hash passwords with a salted, slow algorithm and verify them on login.",
            ["src/utils/password.ts"],
        ),
        (
            "Add registration and login endpoints",
            "Create signup, login and logout handlers and their routes.",
            ["src/controllers/auth.controller.ts", "src/routes/auth.routes.ts"],
        ),
        (
            "Issue and verify session tokens",
            "Sign a token on successful login and validate it on later requests.",
            ["src/services/token.service.ts"],
        ),
        (
            "Add authentication middleware",
            "Reject requests without a valid token and attach the current user to the request.",
            ["src/middleware/auth.middleware.ts"],
        ),
        (
            "Protect private routes",
            f"Apply the authentication middleware to routes in {scope} that require a signed-in user.",
            ["src/routes/index.ts"],
        ),
        (
            "Write authentication tests",
            "Test registration, login, logout and access to protected routes.",
            ["tests/auth.test.ts"],
        ),
    ]


def _refactor_steps(scope: str, slug: str) -> list[StepDraft]:
    return [
        (
            f"Review current structure of {scope}",
            f"Map the responsibilities, dependencies and pain points of {scope}.",
            [],
        ),
        (
            f"Add characterization tests for {scope}",
            f"Pin down the current behaviour of {scope} before changing it.",
            [f"tests/{slug}.test.ts"],
        ),
        (
            f"Extract reusable parts of {scope}",
            f"Move duplicated logic in {scope} into small, focused helpers.",
            [f"src/{slug}/index.ts", f"src/{slug}/helpers.ts"],
        ),
        (
            f"Simplify {scope} interfaces",
            f"Rename unclear identifiers and remove dead code paths in {scope}.",
            [f"src/{slug}/index.ts"],
        ),
        (
            "Verify behaviour and update docs",
            f"Run the test suite and document the new structure of {scope}.",
            [f"tests/{slug}.test.ts", f"docs/{slug}.md"],
        ),
    ]


def _feature_steps(scope: str, slug: str) -> list[StepDraft]:
    return [
        (
            f"Define requirements for {scope}",
            f"Write down the expected behaviour and acceptance criteria for {scope}.",
            [f"docs/features/{slug}.md"],
        ),
        (
            f"Design {scope} types",
            f"Declare the data structures and interfaces {scope} needs.",
            [f"src/types/{slug}.ts"],
        ),
        (
            f"Implement {scope} service",
            f"Write the core logic for {scope}.",
            [f"src/services/{slug}.service.ts"],
        ),
        (
            f"Expose {scope} through the API",
            f"Add the controller and routes that make {scope} available.",
            [f"src/controllers/{slug}.controller.ts", f"src/routes/{slug}.routes.ts"],
        ),
        (
            f"Write tests for {scope}",
            f"Cover the service and the endpoints of {scope}.",
            [f"tests/{slug}.test.ts"],
        ),
        (
            f"Document {scope}",
            f"Explain how to use {scope} and note any configuration it needs.",
            ["README.md"],
        ),
    ]


def _bugfix_steps(scope: str, slug: str) -> list[StepDraft]:
    return [
        (
            f"Reproduce the bug in {scope}",
            f"Find reliable steps that trigger the faulty behaviour in {scope}.",
            [],
        ),
        (
            "Write a failing regression test",
            f"Capture the bug in {scope} as a test that fails before the fix.",
            [f"tests/{slug}.regression.test.ts"],
        ),
        (
            f"Fix the root cause in {scope}",
            f"Correct the underlying defect in {scope} rather than the symptom.",
            [f"src/{slug}.ts"],
        ),
        (
            "Verify the fix",
            "Run the regression test and the full suite to confirm nothing else broke.",
            [f"tests/{slug}.regression.test.ts"],
        ),
    ]


def _other_steps(scope: str, slug: str) -> list[StepDraft]:
    return [
        (
            f"Investigate {scope}",
            f"Gather context on {scope} and decide what needs to change.",
            [],
        ),
        (
            f"Implement changes for {scope}",
            f"Make the changes identified for {scope}.",
            [f"src/{slug}.ts"],
        ),
        (
            "Verify and document",
            f"Test the changes to {scope} and record what was done.",
            [f"tests/{slug}.test.ts", f"docs/{slug}.md"],
        ),
    ]


def _other_fallback_scope(description: str) -> str:
    tokens = _WORD.findall(description)
    if not tokens:
        return "task"
    return tokens[0][:OTHER_TOKEN_LIMIT]


GENERATORS: dict[TaskCategory, Callable[[str, str], list[StepDraft]]] = {
    TaskCategory.CRUD: _crud_steps,
    TaskCategory.AUTHENTICATION: _authentication_steps,
    TaskCategory.REFACTOR: _refactor_steps,
    TaskCategory.FEATURE: _feature_steps,
    TaskCategory.BUGFIX: _bugfix_steps,
    TaskCategory.OTHER: _other_steps,
}

FALLBACK_SCOPES: dict[TaskCategory, str] = {
    TaskCategory.CRUD: "resource",
    TaskCategory.AUTHENTICATION: "the application",
    TaskCategory.REFACTOR: "codebase",
    TaskCategory.FEATURE: "feature",
    TaskCategory.BUGFIX: "affected code",
}

STEP_COUNTS: dict[TaskCategory, int] = {
    TaskCategory.OTHER: 3,
    TaskCategory.BUGFIX: 4,
    TaskCategory.REFACTOR: 5,
    TaskCategory.CRUD: 6,
    TaskCategory.FEATURE: 6,
    TaskCategory.AUTHENTICATION: 7,
}


def resolve_scope(task: TaskDescriptor) -> str:
    """Scope text used in step wording, with the category fallback applied."""
    scope = task.scope.strip()
    if scope:
        return scope
    if task.category is TaskCategory.OTHER:
        return _other_fallback_scope(task.description)
    return FALLBACK_SCOPES[task.category]


class TemplateStrategy(BreakdownStrategy):
    """
    Fixed step skeletons per category.

    Never suspends and never fails for a well-formed TaskDescriptor.
    """

    @property
    def name(self) -> str:
        return "template"

    def build(self, task: TaskDescriptor) -> Breakdown:
        """Synchronous core of ``analyze``."""
        scope = resolve_scope(task)
        slug = sanitize_slug(scope)
        generator = GENERATORS[task.category]

        drafts = generator(scope, slug)
        if not drafts:
            raise EmptyResultError(
                f"No steps generated for category {task.category.value}",
                context={"category": task.category.value},
            )

        logger.debug(
            "Generated template breakdown",
            category=task.category.value,
            slug=slug,
            steps=len(drafts),
        )

        return Breakdown(
            task_description=task.description,
            steps=tuple(
                Step(id=index, title=title, description=description, files=tuple(files))
                for index, (title, description, files) in enumerate(drafts, start=1)
            ),
        )

    async def analyze(self, task: TaskDescriptor) -> Breakdown:
        return self.build(task)
