from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from audio_flashcards.core.config import settings
from audio_flashcards.core.db.base import async_session_maker
from audio_flashcards.modules.quiz.planner import QuizPlanner
from audio_flashcards.modules.quiz.store import DatabaseQuizStore
from .schemas import ChoicesRequest, ChoicesResponse, QuizOrderResponse


router = APIRouter()


def get_quiz_planner() -> QuizPlanner:
    return QuizPlanner(DatabaseQuizStore(async_session_maker))


Planner = Annotated[QuizPlanner, Depends(get_quiz_planner)]


@router.get(
    f"/{settings.app.version}/quiz/projects/{{project_id:int}}/order",
    response_model=QuizOrderResponse,
    tags=["quiz"],
)
async def get_randomized_flashcard_order(
    project_id: int, planner: Planner
) -> QuizOrderResponse:
    # Unknown projects simply have no flashcards
    order = await planner.plan_order(project_id)
    return QuizOrderResponse(project_id=project_id, flashcard_ids=order)


@router.post(
    f"/{settings.app.version}/quiz/choices",
    response_model=ChoicesResponse,
    tags=["quiz"],
)
async def get_randomized_answers_for_question(
    req: ChoicesRequest, planner: Planner
) -> ChoicesResponse:
    choices = await planner.plan_choices(
        req.project_id, req.flashcard_id, req.answer, req.num_choices
    )
    return ChoicesResponse(choices=choices)
