"""Field constraints checked before any task write."""

from taskboard.schemas import TaskPayload, TaskStatus

MAX_TITLE_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 10_000
MAX_TAGS = 50
MAX_TAG_LENGTH = 100
MAX_NOTES_LENGTH = 2_000


def validate_task(task: TaskPayload) -> str | None:
    """Return the first violated constraint, or None if the task is valid.

    Emptiness is checked on trimmed values, lengths on the raw ones.
    """
    if not task.title.strip():
        return "title must not be empty"
    if len(task.title) > MAX_TITLE_LENGTH:
        return f"title must be at most {MAX_TITLE_LENGTH} characters"
    if len(task.description) > MAX_DESCRIPTION_LENGTH:
        return f"description must be at most {MAX_DESCRIPTION_LENGTH} characters"
    if len(task.tags) > MAX_TAGS:
        return f"tags must be at most {MAX_TAGS} items"
    if any(len(tag) > MAX_TAG_LENGTH for tag in task.tags):
        return f"each tag must be at most {MAX_TAG_LENGTH} characters"
    if TaskStatus.parse(task.status) is None:
        return f"status must be one of: {TaskStatus.choices()}"
    if not task.project.strip():
        return "project must not be empty"
    if not task.assignee.strip():
        return "assignee must not be empty"
    if task.notes is not None and len(task.notes) > MAX_NOTES_LENGTH:
        return f"notes must be at most {MAX_NOTES_LENGTH} characters"
    return None
