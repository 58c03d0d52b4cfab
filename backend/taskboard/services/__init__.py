"""Services package."""

from taskboard.services.tasks import LookupService, TaskService, normalize_notes

__all__ = [
    "LookupService",
    "TaskService",
    "normalize_notes",
]
