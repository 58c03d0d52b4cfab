"""Assignees API endpoints."""

from fastapi import APIRouter, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.session import DBSession
from taskboard.models import DEFAULT_ASSIGNEE_ID, DEFAULT_ASSIGNEE_NAME, Assignee
from taskboard.schemas import NamedCreate, NamedResponse
from taskboard.services.tasks import LookupService

router = APIRouter()


def assignee_service(db: AsyncSession) -> LookupService:
    return LookupService(db, Assignee, "assignee", DEFAULT_ASSIGNEE_ID, DEFAULT_ASSIGNEE_NAME)


@router.get("", response_model=list[NamedResponse])
async def list_assignees(db: DBSession) -> list[NamedResponse]:
    """List assignees ordered by name."""
    rows = await assignee_service(db).list_all()
    return [NamedResponse.model_validate(row) for row in rows]


@router.post("", response_model=NamedResponse, status_code=status.HTTP_201_CREATED)
async def create_assignee(body: NamedCreate, db: DBSession) -> NamedResponse:
    """Create an assignee. Names are trimmed and must be unique."""
    row = await assignee_service(db).create(body.name)
    return NamedResponse.model_validate(row)


@router.delete("/{assignee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignee(assignee_id: int, db: DBSession) -> Response:
    """Delete an assignee. The default assignee cannot be deleted."""
    await assignee_service(db).delete(assignee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
