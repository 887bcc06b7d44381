"""
Core Types and Data Structures

Defines the fundamental types shared by the classifier, the strategies
and the CLI. These are intentionally simple, immutable and serializable.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator


class TaskCategory(str, Enum):
    """Coarse category a task description is classified into."""

    CRUD = "CRUD"
    AUTHENTICATION = "AUTHENTICATION"
    REFACTOR = "REFACTOR"
    FEATURE = "FEATURE"
    BUGFIX = "BUGFIX"
    OTHER = "OTHER"


class TaskDescriptor(BaseModel):
    """
    A classified task.

    Created once by the classifier and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    description: str
    category: TaskCategory = TaskCategory.OTHER
    scope: str = ""  # Empty when no code area could be extracted


class Step(BaseModel):
    """A single actionable step of a breakdown."""

    model_config = ConfigDict(frozen=True)

    id: PositiveInt
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    files: tuple[str, ...] = ()


class Breakdown(BaseModel):
    """
    Full output of analyzing one task.

    Step ids are contiguous and match their position (1..n).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    task_description: str = Field(alias="taskDescription")
    steps: tuple[Step, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_step_ids(self) -> "Breakdown":
        for position, step in enumerate(self.steps, start=1):
            if step.id != position:
                raise ValueError(
                    f"Step ids must be sequential: expected {position}, got {step.id}"
                )
        return self

    def __len__(self) -> int:
        return len(self.steps)


class MessageRole(str, Enum):
    """Role of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single chat message sent to a completion endpoint."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class LLMResponse(BaseModel):
    """Normalized reply from a chat-completion provider."""

    content: str | None = None
    model: str | None = None
    finish_reason: str | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: float = 0.0
    attempts: int = 1

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens
