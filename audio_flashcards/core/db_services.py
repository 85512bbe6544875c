"""Database service classes for projects, flashcards and quiz data lookups."""

from __future__ import annotations

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select

from audio_flashcards.core.db.schemas.projects import Project
from audio_flashcards.core.db.schemas.flashcards import Flashcard
from audio_flashcards.core.logging import get_logger


logger = get_logger(__name__)


class ProjectService:
    """Service for managing projects in the database."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_projects(self) -> list[Project]:
        result = await self.session.execute(select(Project).order_by(Project.id))
        return list(result.scalars().all())

    async def get_project(self, project_id: int) -> Optional[Project]:
        result = await self.session.execute(
            select(Project).where(Project.id == project_id)
        )
        return result.scalar_one_or_none()

    async def create_project(self, name: str, description: str = "") -> Project:
        project = Project(name=name, description=description or "")
        self.session.add(project)
        await self.session.commit()
        await self.session.refresh(project)
        logger.info("Project created", extra={"project": project.id})
        return project

    async def update_project(
        self, project_id: int, *, name: str, description: str = ""
    ) -> Optional[Project]:
        project = await self.get_project(project_id)
        if not project:
            return None
        project.name = name
        project.description = description or ""
        await self.session.commit()
        await self.session.refresh(project)
        return project

    async def delete_project(self, project_id: int) -> bool:
        """Delete a project together with its flashcards. Returns False if missing."""
        project = await self.get_project(project_id)
        if not project:
            return False

        # Flashcards first, then the project itself
        await self.session.execute(
            delete(Flashcard).where(Flashcard.project_id == project_id)
        )
        await self.session.execute(delete(Project).where(Project.id == project_id))
        await self.session.commit()
        logger.info("Project deleted", extra={"project": project_id})
        return True


class FlashcardService:
    """Service for managing flashcards (audio clip + answer) in the database."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_flashcards(self, project_id: int) -> list[Flashcard]:
        result = await self.session.execute(
            select(Flashcard)
            .where(Flashcard.project_id == project_id)
            .order_by(Flashcard.id)
        )
        return list(result.scalars().all())

    async def get_flashcard(self, flashcard_id: int) -> Optional[Flashcard]:
        result = await self.session.execute(
            select(Flashcard).where(Flashcard.id == flashcard_id)
        )
        return result.scalar_one_or_none()

    async def create_flashcard(
        self,
        *,
        project_id: int,
        file_name: str,
        audio: bytes,
        answer: str,
    ) -> Flashcard:
        flashcard = Flashcard(
            project_id=project_id,
            file_name=file_name,
            audio=audio,
            answer=answer,
        )
        self.session.add(flashcard)
        await self.session.commit()
        await self.session.refresh(flashcard)
        logger.info(
            f"Flashcard {flashcard.id} created ({file_name})",
            extra={"project": project_id},
        )
        return flashcard

    async def update_flashcard(
        self,
        flashcard_id: int,
        *,
        answer: str,
        file_name: Optional[str] = None,
        audio: Optional[bytes] = None,
    ) -> Optional[Flashcard]:
        """Update the answer, and the audio clip only when a new one is given."""
        flashcard = await self.get_flashcard(flashcard_id)
        if not flashcard:
            return None
        flashcard.answer = answer
        if audio is not None:
            flashcard.audio = audio
            flashcard.file_name = file_name or flashcard.file_name
        await self.session.commit()
        await self.session.refresh(flashcard)
        return flashcard

    async def delete_flashcard(self, flashcard_id: int) -> bool:
        result = await self.session.execute(
            delete(Flashcard).where(Flashcard.id == flashcard_id)
        )
        await self.session.commit()
        return bool(result.rowcount)


class QuizDataService:
    """Read-only lookups the quiz planner needs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_flashcard_ids(self, project_id: int) -> list[int]:
        result = await self.session.execute(
            select(Flashcard.id).where(Flashcard.project_id == project_id)
        )
        return list(result.scalars().all())

    async def get_flashcard_detail(self, flashcard_id: int) -> Optional[Flashcard]:
        result = await self.session.execute(
            select(Flashcard).where(Flashcard.id == flashcard_id)
        )
        return result.scalar_one_or_none()

    async def list_other_answers(
        self, project_id: int, exclude_flashcard_id: int
    ) -> list[str]:
        result = await self.session.execute(
            select(Flashcard.answer).where(
                Flashcard.project_id == project_id,
                Flashcard.id != exclude_flashcard_id,
            )
        )
        return list(result.scalars().all())
