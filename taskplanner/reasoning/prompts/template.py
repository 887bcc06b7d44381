"""
Prompt Template System

Provides templating and versioning for the prompts sent to the remote
model.

Design decisions:
- Templates use Jinja2 with StrictUndefined so typos fail loudly
- Immutable templates (create new versions, don't modify)
- Registry pattern for centralized access
"""

import hashlib
from typing import Any

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateSyntaxError, UndefinedError
from pydantic import BaseModel, ConfigDict, Field

_env = Environment(loader=BaseLoader(), undefined=StrictUndefined, keep_trailing_newline=True)


class PromptTemplate(BaseModel):
    """
    A versioned prompt template.

    Templates are immutable after creation. To update a prompt,
    create a new version.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    template: str
    version: str
    description: str = ""

    # Expected variables (for validation)
    required_variables: frozenset[str] = Field(default_factory=frozenset)

    @property
    def content_hash(self) -> str:
        """Short hash of name, version and body for change detection."""
        content = f"{self.name}:{self.version}:{self.template}"
        return hashlib.sha256(content.encode()).hexdigest()[:12]

    def render(self, **variables: Any) -> str:
        """
        Render the template with provided variables.

        Raises:
            ValueError: If required variables are missing or undefined
        """
        missing = self.required_variables - set(variables)
        if missing:
            raise ValueError(f"Missing required variables: {sorted(missing)}")

        try:
            return _env.from_string(self.template).render(**variables)
        except UndefinedError as e:
            raise ValueError(f"Undefined variable in template {self.name!r}: {e}")

    def validate_template(self) -> list[str]:
        """Return syntax errors (empty if valid)."""
        try:
            _env.parse(self.template)
        except TemplateSyntaxError as e:
            return [f"Syntax error: {e}"]
        return []


BREAKDOWN_SYSTEM = PromptTemplate(
    name="breakdown_system",
    version="1.0.0",
    template=(
        "You are a technical planning assistant that breaks down software development "
        "tasks into actionable steps.\n"
        "You analyze task requirements and generate detailed, step-by-step implementation "
        "plans with realistic file paths."
    ),
    description="System role for the remote breakdown strategy",
)

BREAKDOWN_USER = PromptTemplate(
    name="breakdown_user",
    version="1.0.0",
    template="""Please break down the following software development task into actionable steps:

Task Description: {{ description }}
Task Type: {{ category }}
Task Scope: {{ scope if scope else "(not specified)" }}

Generate a JSON response with the following structure:
{
  "steps": [
    {
      "id": 1,
      "title": "Short, actionable step title",
      "description": "Detailed explanation of what needs to be done in this step",
      "files": ["path/to/file1.ts", "path/to/file2.ts"]
    }
  ]
}

Guidelines:
- Generate {{ min_steps }}-{{ max_steps }} steps depending on task complexity
- Each step should be specific and actionable
- Suggest realistic file paths based on common project structures (e.g., src/models/, src/controllers/, tests/)
- Include an empty array [] for files if the step is planning/analysis only
- Order steps so prerequisites come first (e.g., create data models before the controllers that use them)
""",
    description="Task details plus the JSON output contract",
    required_variables=frozenset({"description", "category", "scope", "min_steps", "max_steps"}),
)


class PromptRegistry:
    """
    Central registry for prompt templates.

    Provides:
    - Template storage and retrieval
    - Version management
    - Default breakdown prompts
    """

    def __init__(self):
        self._templates: dict[str, dict[str, PromptTemplate]] = {}
        self._default_versions: dict[str, str] = {}

        for template in (BREAKDOWN_SYSTEM, BREAKDOWN_USER):
            self.register(template)
            self.set_default_version(template.name, template.version)

    def register(self, template: PromptTemplate) -> None:
        """
        Register a template version.

        Raises:
            ValueError: If the version already exists or the template is invalid
        """
        errors = template.validate_template()
        if errors:
            raise ValueError(f"Invalid template {template.name!r}: {errors}")

        versions = self._templates.setdefault(template.name, {})
        if template.version in versions:
            raise ValueError(f"Template {template.name!r} version {template.version} already registered")
        versions[template.version] = template

    def set_default_version(self, name: str, version: str) -> None:
        if version not in self._templates.get(name, {}):
            raise KeyError(f"Unknown template {name!r} version {version}")
        self._default_versions[name] = version

    def get(self, name: str, version: str | None = None) -> PromptTemplate:
        """Get a template, defaulting to its default version."""
        versions = self._templates.get(name)
        if not versions:
            raise KeyError(f"Unknown template {name!r}")

        version = version or self._default_versions.get(name)
        if version not in versions:
            raise KeyError(f"Unknown template {name!r} version {version}")
        return versions[version]

    def render(self, name: str, version: str | None = None, **variables: Any) -> str:
        return self.get(name, version).render(**variables)

    def list_templates(self) -> list[str]:
        return sorted(self._templates)
