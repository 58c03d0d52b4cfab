"""Tasks API endpoints."""

from fastapi import APIRouter, Request, Response, status

from taskboard.ai.service import TaskExtractionService
from taskboard.db.session import DBSession
from taskboard.schemas import (
    GenerateTasksRequest,
    TaskPayload,
    TaskResponse,
    TaskSprintUpdate,
    TaskStatusUpdate,
)
from taskboard.services.tasks import TaskService

router = APIRouter()


@router.get("", response_model=list[TaskResponse])
async def list_tasks(db: DBSession) -> list[TaskResponse]:
    """List all tasks in id order."""
    rows = await TaskService(db).list_tasks()
    return [TaskResponse.model_validate(row) for row in rows]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(task_data: TaskPayload, db: DBSession) -> TaskResponse:
    """Create a new task.

    The id is assigned by the store, in_sprint starts false and a missing or
    unknown status becomes ``todo``.
    """
    row = await TaskService(db).create_task(task_data)
    return TaskResponse.model_validate(row)


@router.post(
    "/generate",
    response_model=list[TaskResponse],
    status_code=status.HTTP_201_CREATED,
)
async def generate_tasks(
    body: GenerateTasksRequest,
    request: Request,
    db: DBSession,
) -> list[TaskResponse]:
    """Extract tasks from meeting notes with the AI provider and store them."""
    service: TaskExtractionService = request.app.state.extraction_service
    rows = await service.generate_tasks(body.meeting_notes, db)
    return [TaskResponse.model_validate(row) for row in rows]


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(task_id: int, task_data: TaskPayload, db: DBSession) -> TaskResponse:
    """Replace every mutable field of a task."""
    row = await TaskService(db).replace_task(task_id, task_data)
    return TaskResponse.model_validate(row)


@router.put("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: int, body: TaskStatusUpdate, db: DBSession
) -> TaskResponse:
    """Move a task to another status."""
    row = await TaskService(db).set_status(task_id, body.status)
    return TaskResponse.model_validate(row)


@router.put("/{task_id}/sprint", response_model=TaskResponse)
async def update_task_sprint(
    task_id: int, body: TaskSprintUpdate, db: DBSession
) -> TaskResponse:
    """Add a task to, or remove it from, the current sprint."""
    row = await TaskService(db).set_sprint(task_id, body.in_sprint)
    return TaskResponse.model_validate(row)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, db: DBSession) -> Response:
    """Delete a task."""
    await TaskService(db).delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
