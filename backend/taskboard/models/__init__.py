"""Database models."""

from taskboard.models.task import (
    DEFAULT_ASSIGNEE_ID,
    DEFAULT_ASSIGNEE_NAME,
    DEFAULT_PROJECT_ID,
    DEFAULT_PROJECT_NAME,
    Assignee,
    Project,
    Task,
)

__all__ = [
    "DEFAULT_ASSIGNEE_ID",
    "DEFAULT_ASSIGNEE_NAME",
    "DEFAULT_PROJECT_ID",
    "DEFAULT_PROJECT_NAME",
    "Assignee",
    "Project",
    "Task",
]
