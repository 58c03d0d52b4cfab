"""Projects API endpoints."""

from fastapi import APIRouter, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.session import DBSession
from taskboard.models import DEFAULT_PROJECT_ID, DEFAULT_PROJECT_NAME, Project
from taskboard.schemas import NamedCreate, NamedResponse
from taskboard.services.tasks import LookupService

router = APIRouter()


def project_service(db: AsyncSession) -> LookupService:
    return LookupService(db, Project, "project", DEFAULT_PROJECT_ID, DEFAULT_PROJECT_NAME)


@router.get("", response_model=list[NamedResponse])
async def list_projects(db: DBSession) -> list[NamedResponse]:
    """List projects ordered by name."""
    rows = await project_service(db).list_all()
    return [NamedResponse.model_validate(row) for row in rows]


@router.post("", response_model=NamedResponse, status_code=status.HTTP_201_CREATED)
async def create_project(body: NamedCreate, db: DBSession) -> NamedResponse:
    """Create a project. Names are trimmed and must be unique."""
    row = await project_service(db).create(body.name)
    return NamedResponse.model_validate(row)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: int, db: DBSession) -> Response:
    """Delete a project. The default project cannot be deleted."""
    await project_service(db).delete(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
