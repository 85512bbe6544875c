"""Quiz module exports."""

from .backend import LocalQuizBackend, QuizBackend
from .errors import StoreUnavailable
from .models import (
    FlashcardDetail,
    QuestionOutcome,
    QuizContext,
    QuizSnapshot,
    QuizStatus,
)
from .planner import QuizPlanner, shuffle
from .state import QuizSession
from .store import DatabaseQuizStore, QuizStore

__all__ = [
    "DatabaseQuizStore",
    "FlashcardDetail",
    "LocalQuizBackend",
    "QuestionOutcome",
    "QuizBackend",
    "QuizContext",
    "QuizPlanner",
    "QuizSession",
    "QuizSnapshot",
    "QuizStatus",
    "QuizStore",
    "StoreUnavailable",
    "shuffle",
]
