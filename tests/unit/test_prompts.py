"""
Unit Tests - Prompt Templates
"""

import pytest

from taskplanner.reasoning.prompts.template import (
    BREAKDOWN_USER,
    PromptRegistry,
    PromptTemplate,
)

USER_VARIABLES = {
    "description": "Add search",
    "category": "FEATURE",
    "scope": "catalog",
    "min_steps": 3,
    "max_steps": 7,
}


class TestPromptTemplate:
    def test_render(self):
        template = PromptTemplate(name="greet", version="1", template="Hello {{ who }}")
        assert template.render(who="world") == "Hello world"

    def test_missing_required_variable(self):
        with pytest.raises(ValueError, match="Missing required variables"):
            BREAKDOWN_USER.render(description="x")

    def test_undefined_variable_is_strict(self):
        template = PromptTemplate(name="t", version="1", template="{{ nope }}")
        with pytest.raises(ValueError, match="Undefined variable"):
            template.render()

    def test_validate_template(self):
        assert PromptTemplate(name="ok", version="1", template="{{ a }}").validate_template() == []
        assert PromptTemplate(name="bad", version="1", template="{% if %}").validate_template()

    def test_content_hash_tracks_version(self):
        first = PromptTemplate(name="t", version="1", template="x")
        second = PromptTemplate(name="t", version="2", template="x")
        assert first.content_hash != second.content_hash

    def test_user_prompt_contains_json_contract(self):
        text = BREAKDOWN_USER.render(**USER_VARIABLES)

        assert "Task Description: Add search" in text
        assert "Task Type: FEATURE" in text
        assert "Task Scope: catalog" in text
        assert '"files": ["path/to/file1.ts", "path/to/file2.ts"]' in text
        assert "Generate 3-7 steps" in text


class TestPromptRegistry:
    def test_defaults_registered(self):
        registry = PromptRegistry()
        assert registry.list_templates() == ["breakdown_system", "breakdown_user"]

    def test_versioning(self):
        registry = PromptRegistry()
        registry.register(PromptTemplate(name="breakdown_system", version="2.0.0", template="v2"))

        assert registry.render("breakdown_system") != "v2"
        assert registry.render("breakdown_system", version="2.0.0") == "v2"

        registry.set_default_version("breakdown_system", "2.0.0")
        assert registry.render("breakdown_system") == "v2"

    def test_duplicate_version_rejected(self):
        registry = PromptRegistry()
        with pytest.raises(ValueError, match="already registered"):
            registry.register(PromptTemplate(name="breakdown_user", version="1.0.0", template="x"))

    def test_invalid_template_rejected(self):
        with pytest.raises(ValueError, match="Invalid template"):
            PromptRegistry().register(PromptTemplate(name="bad", version="1", template="{% for %}"))

    def test_unknown_template(self):
        with pytest.raises(KeyError):
            PromptRegistry().get("missing")
