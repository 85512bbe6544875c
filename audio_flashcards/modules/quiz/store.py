"""Store contract used by the quiz planner and its SQLAlchemy implementation."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audio_flashcards.core.db_services import QuizDataService
from audio_flashcards.core.logging import get_logger
from audio_flashcards.modules.quiz.errors import StoreUnavailable
from audio_flashcards.modules.quiz.models import FlashcardDetail


logger = get_logger(__name__)


class QuizStore(Protocol):
    async def list_flashcard_ids(self, project_id: int) -> list[int]: ...

    async def get_flashcard_detail(self, flashcard_id: int) -> FlashcardDetail: ...

    async def list_other_answers(
        self, project_id: int, exclude_flashcard_id: int
    ) -> list[str]: ...


class DatabaseQuizStore:
    """QuizStore backed by the SQLite database.

    Each call opens its own short-lived session. Any SQLAlchemy failure, and a
    flashcard lookup that returns no row, is raised as StoreUnavailable.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def list_flashcard_ids(self, project_id: int) -> list[int]:
        try:
            async with self._session_maker() as session:
                return await QuizDataService(session).list_flashcard_ids(project_id)
        except SQLAlchemyError as e:
            logger.error(f"Listing flashcards failed: {e}", extra={"project": project_id})
            raise StoreUnavailable(str(e)) from e

    async def get_flashcard_detail(self, flashcard_id: int) -> FlashcardDetail:
        try:
            async with self._session_maker() as session:
                row = await QuizDataService(session).get_flashcard_detail(flashcard_id)
        except SQLAlchemyError as e:
            logger.error(f"Fetching flashcard {flashcard_id} failed: {e}")
            raise StoreUnavailable(str(e)) from e
        if row is None:
            raise StoreUnavailable(f"Flashcard {flashcard_id} not found")
        return FlashcardDetail(file_name=row.file_name, audio=row.audio, answer=row.answer)

    async def list_other_answers(
        self, project_id: int, exclude_flashcard_id: int
    ) -> list[str]:
        try:
            async with self._session_maker() as session:
                return await QuizDataService(session).list_other_answers(
                    project_id, exclude_flashcard_id
                )
        except SQLAlchemyError as e:
            logger.error(f"Listing answers failed: {e}", extra={"project": project_id})
            raise StoreUnavailable(str(e)) from e
