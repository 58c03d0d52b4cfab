"""Pydantic schemas for request and response bodies."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class TaskStatus(str, Enum):
    """Workflow state of a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    BLOCKED = "blocked"

    @classmethod
    def parse(cls, value: object) -> "TaskStatus | None":
        """Map a wire string to a status, or None when it is not one."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def choices(cls) -> str:
        return ", ".join(status.value for status in cls)


# =============================================================================
# Tasks
# =============================================================================


class TaskPayload(BaseModel):
    """Task body accepted by create and full update.

    status is kept as a raw string so the create path can fall back to
    ``todo`` and the update path can report it through validation.
    """

    id: int | None = None  # ignored, identity comes from the store or the path
    title: str
    description: str
    tags: list[str]
    deadline: str | None = None
    project: str
    assignee: str
    status: str = TaskStatus.TODO.value
    in_sprint: bool = False
    notes: str | None = None


class TaskResponse(BaseModel):
    """Stored task as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    tags: list[str]
    deadline: str | None
    project: str
    assignee: str
    status: str
    in_sprint: bool
    notes: str | None = None

    @field_validator("notes", mode="before")
    @classmethod
    def empty_notes_as_none(cls, v: str | None) -> str | None:
        return v or None


class TaskStatusUpdate(BaseModel):
    """Partial update of the status field."""

    status: str


class TaskSprintUpdate(BaseModel):
    """Partial update of sprint membership."""

    in_sprint: bool


class GenerateTasksRequest(BaseModel):
    """Meeting notes to extract tasks from."""

    meeting_notes: str


# =============================================================================
# Lookups
# =============================================================================


class NamedCreate(BaseModel):
    """Create a project or assignee."""

    name: str


class NamedResponse(BaseModel):
    """Project or assignee row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
