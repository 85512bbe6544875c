"""Pydantic models for the quiz planner and session runner.

Mirrors the flashcards module: plain schemas shared by the API handlers, the
HTTP client and the in-process session runner.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class QuizStatus(str, Enum):
    LOADING = "loading"
    PRESENTING = "presenting"
    EVALUATED = "evaluated"
    FINISHED = "finished"
    EMPTY = "empty"


class QuestionOutcome(str, Enum):
    CORRECT = "Correct"
    INCORRECT = "Incorrect"


class FlashcardDetail(BaseModel):
    """The parts of a flashcard a question needs: the clip and its answer."""

    file_name: str
    audio: bytes
    answer: str


class QuizContext(BaseModel):
    """Per-screen context handed to a quiz session."""

    project_id: int
    project_name: str = ""
    num_choices: int = Field(default=5, ge=1)


class QuizSnapshot(BaseModel):
    """Read-only view of a session for rendering."""

    status: QuizStatus
    project_name: str = ""
    question_number: int = 0
    total_questions: int = 0
    file_name: Optional[str] = None
    audio: Optional[bytes] = None
    choices: list[str] = Field(default_factory=list)
    chosen_answer: Optional[str] = None
    outcome: Optional[QuestionOutcome] = None
    correct_answer: Optional[str] = None  # only revealed after an incorrect answer
    score: int = 0
    attempted: int = 0
    can_submit: bool = False
    can_advance: bool = False
    awaiting_finish: bool = False
    error: Optional[str] = None
