from __future__ import annotations

import random
from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audio_flashcards.modules.quiz.models import FlashcardDetail
from audio_flashcards.modules.quiz.planner import QuizPlanner
from audio_flashcards.modules.quiz.store import DatabaseQuizStore, QuizStore


class QuizBackend(Protocol):
    """What a quiz session needs from the data-access side."""

    async def plan_order(self, project_id: int) -> list[int]: ...

    async def plan_choices(
        self,
        project_id: int,
        flashcard_id: int,
        correct_answer: str,
        num_choices: int,
    ) -> list[str]: ...

    async def get_flashcard_detail(self, flashcard_id: int) -> FlashcardDetail: ...


class LocalQuizBackend:
    """Runs the planner in-process against a store, no HTTP hop."""

    def __init__(self, store: QuizStore, *, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.planner = QuizPlanner(store, rng=rng)

    @classmethod
    def from_session_maker(
        cls, session_maker: async_sessionmaker[AsyncSession]
    ) -> "LocalQuizBackend":
        return cls(DatabaseQuizStore(session_maker))

    async def plan_order(self, project_id: int) -> list[int]:
        return await self.planner.plan_order(project_id)

    async def plan_choices(
        self,
        project_id: int,
        flashcard_id: int,
        correct_answer: str,
        num_choices: int,
    ) -> list[str]:
        return await self.planner.plan_choices(
            project_id, flashcard_id, correct_answer, num_choices
        )

    async def get_flashcard_detail(self, flashcard_id: int) -> FlashcardDetail:
        return await self.store.get_flashcard_detail(flashcard_id)
