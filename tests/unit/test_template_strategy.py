"""
Unit Tests - Template Strategy
"""

import pytest

from taskplanner.core.types import TaskCategory, TaskDescriptor
from taskplanner.planning.classifier import classify
from taskplanner.reasoning.strategies.template import (
    STEP_COUNTS,
    TemplateStrategy,
    resolve_scope,
    sanitize_slug,
)


@pytest.fixture
def strategy():
    return TemplateStrategy()


class TestSanitizeSlug:
    """Slug derivation."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("payment module", "payment-module"),
            ("Payment Module", "payment-module"),
            ("  user_profile  settings!! ", "user-profile-settings"),
            ("--a--b--", "a-b"),
            ("src/api.v2", "srcapiv2"),
            ("!!!", "scope"),
            ("", "scope"),
        ],
    )
    def test_slugs(self, text, expected):
        assert sanitize_slug(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["payment module", "  Mixed_Case  Words ", "a--b", "!!!", "ünïcödé name", "x" * 40],
    )
    def test_idempotent(self, text):
        once = sanitize_slug(text)
        assert sanitize_slug(once) == once


class TestStepCounts:
    """Fixed step count and contiguous ids for every category."""

    @pytest.mark.parametrize("category", list(TaskCategory))
    @pytest.mark.parametrize("scope", ["orders", "", "@@@", "Very Long Scope Name With Spaces"])
    def test_count_and_ids(self, strategy, category, scope):
        task = TaskDescriptor(description="Some task", category=category, scope=scope)

        breakdown = strategy.build(task)

        assert len(breakdown.steps) == STEP_COUNTS[category]
        assert [s.id for s in breakdown.steps] == list(range(1, STEP_COUNTS[category] + 1))
        assert all(s.title and s.description for s in breakdown.steps)

    def test_counts_match_categories(self):
        assert STEP_COUNTS == {
            TaskCategory.OTHER: 3,
            TaskCategory.BUGFIX: 4,
            TaskCategory.REFACTOR: 5,
            TaskCategory.CRUD: 6,
            TaskCategory.FEATURE: 6,
            TaskCategory.AUTHENTICATION: 7,
        }


class TestScenarios:
    """End-to-end from raw text."""

    @pytest.mark.asyncio
    async def test_authentication(self, strategy):
        task = classify("Add authentication to the app")

        breakdown = await strategy.analyze(task)

        assert task.category == TaskCategory.AUTHENTICATION
        assert len(breakdown.steps) == 7
        assert breakdown.steps[0].title == "Create User model with password field"
        assert breakdown.task_description == "Add authentication to the app"

    @pytest.mark.asyncio
    async def test_crud(self, strategy):
        task = classify("Create CRUD endpoints for products")

        breakdown = await strategy.analyze(task)
        files = [f for step in breakdown.steps for f in step.files]

        assert task.scope == "products"
        assert len(breakdown.steps) == 6
        assert "src/models/products.ts" in files
        assert "src/controllers/products.controller.ts" in files
        assert "src/routes/products.routes.ts" in files
        assert "src/validators/products.validator.ts" in files
        assert "tests/products.test.ts" in files
        assert "docs/api/products.md" in files

    @pytest.mark.asyncio
    async def test_refactor(self, strategy):
        task = classify("Refactor the payment module")

        breakdown = await strategy.analyze(task)

        assert sanitize_slug(task.scope) == "payment-module"
        assert len(breakdown.steps) == 5
        assert "src/payment-module/index.ts" in breakdown.steps[2].files
        assert "payment module" in breakdown.steps[0].title

    @pytest.mark.asyncio
    async def test_other_uses_first_token(self, strategy):
        task = classify("Investigate performance of the dashboard")

        breakdown = await strategy.analyze(task)

        assert task.category == TaskCategory.OTHER
        assert len(breakdown.steps) == 3
        assert breakdown.steps[1].files == ("src/investigate.ts",)


class TestScopeFallbacks:
    """Empty or unusable scopes."""

    def test_authentication_paths_ignore_scope(self, strategy):
        first = strategy.build(
            TaskDescriptor(description="x", category=TaskCategory.AUTHENTICATION, scope="billing")
        )
        second = strategy.build(
            TaskDescriptor(description="x", category=TaskCategory.AUTHENTICATION, scope="")
        )

        assert [s.files for s in first.steps] == [s.files for s in second.steps]

    def test_category_fallback_word(self, strategy):
        breakdown = strategy.build(
            TaskDescriptor(description="x", category=TaskCategory.CRUD, scope="")
        )
        assert breakdown.steps[0].files == ("src/models/resource.ts",)

    def test_unusable_scope_gets_default_slug(self, strategy):
        breakdown = strategy.build(
            TaskDescriptor(description="x", category=TaskCategory.CRUD, scope="@@@")
        )
        assert breakdown.steps[0].files == ("src/models/scope.ts",)

    def test_other_token_is_truncated(self):
        task = TaskDescriptor(
            description="Supercalifragilisticexpialidocious things",
            category=TaskCategory.OTHER,
        )
        assert resolve_scope(task) == "Supercalifragilistic"

    @pytest.mark.parametrize("description", ["", "   ", "?!..."])
    def test_other_without_tokens(self, strategy, description):
        task = TaskDescriptor(description=description, category=TaskCategory.OTHER)

        breakdown = strategy.build(task)

        assert resolve_scope(task) == "task"
        assert breakdown.steps[1].files == ("src/task.ts",)

    def test_task_is_not_mutated(self, strategy):
        task = TaskDescriptor(description="Fix it", category=TaskCategory.BUGFIX, scope="cart")
        snapshot = task.model_copy()

        strategy.build(task)

        assert task == snapshot
