from __future__ import annotations

from pydantic import BaseModel, Field

from audio_flashcards.core.config import settings


class QuizOrderResponse(BaseModel):
    project_id: int
    flashcard_ids: list[int] = Field(default_factory=list)


class ChoicesRequest(BaseModel):
    project_id: int
    flashcard_id: int = Field(..., description="Flashcard being asked; excluded from the pool")
    answer: str = Field(..., description="Correct answer of that flashcard")
    num_choices: int = Field(default_factory=lambda: settings.quiz.num_choices, ge=1)


class ChoicesResponse(BaseModel):
    choices: list[str] = Field(default_factory=list)
