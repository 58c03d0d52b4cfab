"""Application exceptions.

Every error a handler reports to the caller derives from TaskboardError and
carries the HTTP status it maps to. The app-level exception handler renders
them as ``{"error": message}``.
"""


class TaskboardError(Exception):
    """Base exception for errors reported to the caller."""

    status_code: int = 500

    def __init__(self, message: str, code: str = "TASKBOARD_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(TaskboardError):
    """A field constraint was violated."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class BadReferenceError(TaskboardError):
    """A task names a project or assignee that does not exist."""

    status_code = 400

    def __init__(self, kind: str):
        super().__init__(f"{kind} does not exist", code="BAD_REFERENCE")


class ConflictError(TaskboardError):
    """A lookup name is already taken."""

    status_code = 400

    def __init__(self, kind: str):
        super().__init__(f"{kind} already exists", code="ALREADY_EXISTS")


class DefaultRowError(TaskboardError):
    """Attempt to delete a reserved default lookup row."""

    status_code = 400

    def __init__(self, kind: str, name: str):
        super().__init__(
            f"cannot delete default {kind} '{name}'",
            code="DEFAULT_ROW_PROTECTED",
        )


class NotFoundError(TaskboardError):
    """No row matched the requested identity."""

    status_code = 404

    def __init__(self, kind: str):
        super().__init__(f"{kind} not found", code="NOT_FOUND")
