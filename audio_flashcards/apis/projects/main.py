from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from audio_flashcards.core.config import settings
from audio_flashcards.core.db.base import get_session
from audio_flashcards.core.db.schemas.projects import Project
from audio_flashcards.core.db_services import ProjectService
from .schemas import ProjectRead, ProjectWrite


router = APIRouter()


def _to_read(p: Project) -> ProjectRead:
    return ProjectRead(
        id=p.id,
        name=p.name,
        description=p.description or "",
        created_at=p.created_at.isoformat() if p.created_at else None,
    )


@router.get(
    f"/{settings.app.version}/projects",
    response_model=list[ProjectRead],
    tags=["projects"],
)
async def list_projects(
    session: AsyncSession = Depends(get_session),
) -> list[ProjectRead]:
    projects = await ProjectService(session).list_projects()
    return [_to_read(p) for p in projects]


@router.post(
    f"/{settings.app.version}/projects",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    tags=["projects"],
)
async def create_project(
    req: ProjectWrite,
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    project = await ProjectService(session).create_project(
        name=req.name, description=req.description
    )
    return _to_read(project)


@router.get(
    f"/{settings.app.version}/projects/{{project_id:int}}",
    response_model=ProjectRead,
    tags=["projects"],
)
async def get_project(
    project_id: int,
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    project = await ProjectService(session).get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return _to_read(project)


@router.put(
    f"/{settings.app.version}/projects/{{project_id:int}}",
    response_model=ProjectRead,
    tags=["projects"],
)
async def update_project(
    project_id: int,
    req: ProjectWrite,
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    project = await ProjectService(session).update_project(
        project_id, name=req.name, description=req.description
    )
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return _to_read(project)


@router.delete(
    f"/{settings.app.version}/projects/{{project_id:int}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["projects"],
)
async def delete_project(
    project_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    deleted = await ProjectService(session).delete_project(project_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
