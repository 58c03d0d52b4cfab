"""API router package."""

from fastapi import APIRouter

from taskboard.api.v1 import assignees, health, projects, tasks

router = APIRouter()

# Health checks stay at the root; everything else is grouped by resource
router.include_router(health.router, tags=["Health"])
router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(assignees.router, prefix="/assignees", tags=["Assignees"])
router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
