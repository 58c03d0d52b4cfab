"""Task persistence shared by the CRUD endpoints and AI extraction."""

from collections.abc import Sequence

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.exceptions import (
    BadReferenceError,
    ConflictError,
    DefaultRowError,
    NotFoundError,
    ValidationError,
)
from taskboard.models import Assignee, Project, Task
from taskboard.schemas import TaskPayload, TaskStatus
from taskboard.validation import validate_task

logger = structlog.get_logger()


def normalize_notes(notes: str | None) -> str:
    """Trim notes; absent and blank notes are stored as an empty string."""
    return (notes or "").strip()


class TaskService:
    """Task reads and writes against one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def project_exists(self, name: str) -> bool:
        result = await self.db.execute(select(Project.id).where(Project.name == name))
        return result.first() is not None

    async def assignee_exists(self, name: str) -> bool:
        result = await self.db.execute(select(Assignee.id).where(Assignee.name == name))
        return result.first() is not None

    async def check_references(self, task: TaskPayload) -> None:
        """Raise BadReferenceError unless project and assignee exist."""
        if not await self.project_exists(task.project):
            raise BadReferenceError("project")
        if not await self.assignee_exists(task.assignee):
            raise BadReferenceError("assignee")

    async def list_tasks(self) -> Sequence[Task]:
        result = await self.db.execute(select(Task).order_by(Task.id))
        return result.scalars().all()

    async def get_task(self, task_id: int) -> Task:
        task = await self.db.get(Task, task_id, populate_existing=True)
        if task is None:
            raise NotFoundError("task")
        return task

    async def insert_task(self, task: TaskPayload) -> Task:
        """Persist an already validated task as a new row.

        in_sprint always starts false.
        """
        row = Task(
            title=task.title,
            description=task.description,
            tags=list(task.tags),
            deadline=task.deadline,
            project=task.project,
            assignee=task.assignee,
            status=task.status,
            in_sprint=False,
            notes=normalize_notes(task.notes),
        )
        self.db.add(row)
        await self.db.flush()
        return row

    async def create_task(self, task: TaskPayload) -> Task:
        """Validate, check references and insert a client-submitted task."""
        if TaskStatus.parse(task.status) is None:
            task = task.model_copy(update={"status": TaskStatus.TODO.value})
        task = task.model_copy(update={"id": None, "in_sprint": False})

        error = validate_task(task)
        if error:
            raise ValidationError(error)
        await self.check_references(task)

        row = await self.insert_task(task)
        await self.db.commit()
        logger.info("Task created", task_id=row.id, project=row.project)
        return row

    async def replace_task(self, task_id: int, task: TaskPayload) -> Task:
        """Overwrite every mutable field of an existing task."""
        error = validate_task(task)
        if error:
            raise ValidationError(error)
        await self.check_references(task)

        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(
                title=task.title,
                description=task.description,
                tags=list(task.tags),
                deadline=task.deadline,
                project=task.project,
                assignee=task.assignee,
                status=task.status,
                in_sprint=task.in_sprint,
                notes=normalize_notes(task.notes),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("task")
        await self.db.commit()

        logger.info("Task updated", task_id=task_id)
        return await self.get_task(task_id)

    async def set_status(self, task_id: int, status: str) -> Task:
        parsed = TaskStatus.parse(status)
        if parsed is None:
            raise ValidationError("invalid status")

        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(status=parsed.value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("task")
        await self.db.commit()

        logger.info("Task status changed", task_id=task_id, status=parsed.value)
        return await self.get_task(task_id)

    async def set_sprint(self, task_id: int, in_sprint: bool) -> Task:
        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(in_sprint=in_sprint)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("task")
        await self.db.commit()

        logger.info("Task sprint membership changed", task_id=task_id, in_sprint=in_sprint)
        return await self.get_task(task_id)

    async def delete_task(self, task_id: int) -> None:
        result = await self.db.execute(delete(Task).where(Task.id == task_id))
        if result.rowcount == 0:
            raise NotFoundError("task")
        await self.db.commit()
        logger.info("Task deleted", task_id=task_id)


class LookupService:
    """Create, list and delete rows of one lookup table (projects or assignees)."""

    def __init__(
        self,
        db: AsyncSession,
        model: type[Project] | type[Assignee],
        kind: str,
        default_id: int,
        default_name: str,
    ):
        self.db = db
        self.model = model
        self.kind = kind
        self.default_id = default_id
        self.default_name = default_name

    async def list_all(self) -> Sequence[Project | Assignee]:
        result = await self.db.execute(select(self.model).order_by(self.model.name))
        return result.scalars().all()

    async def create(self, name: str) -> Project | Assignee:
        name = name.strip()
        if not name:
            raise ValidationError("name must not be empty")

        row = self.model(name=name)
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(self.kind)

        logger.info("Lookup row created", kind=self.kind, id=row.id, name=name)
        return row

    async def delete(self, row_id: int) -> None:
        if row_id == self.default_id:
            raise DefaultRowError(self.kind, self.default_name)

        result = await self.db.execute(delete(self.model).where(self.model.id == row_id))
        if result.rowcount == 0:
            raise NotFoundError(self.kind)
        await self.db.commit()
        logger.info("Lookup row deleted", kind=self.kind, id=row_id)
