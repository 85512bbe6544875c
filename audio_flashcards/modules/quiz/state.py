"""Single-player quiz session runner.

A session walks a fixed, shuffled plan of flashcards one question at a time:
loading -> presenting -> evaluated -> (presenting | finished), with an
``empty`` terminal state when the project has no flashcards. The plan is
drawn once in ``start``; ``retry`` builds a new session instead of
reshuffling this one. Only one fetch is outstanding at a time.
"""

from __future__ import annotations

import asyncio
from typing import Optional
from uuid import uuid4

from audio_flashcards.core.logging import bind, get_logger
from audio_flashcards.modules.quiz.backend import QuizBackend
from audio_flashcards.modules.quiz.errors import StoreUnavailable
from audio_flashcards.modules.quiz.models import (
    FlashcardDetail,
    QuestionOutcome,
    QuizContext,
    QuizSnapshot,
    QuizStatus,
)


logger = get_logger(__name__)


def _short_id() -> str:
    # 6-char slice from uuid4
    return uuid4().hex[:6]


class QuizSession:
    def __init__(self, context: QuizContext, backend: QuizBackend) -> None:
        self.id = _short_id()
        self.context = context
        self.backend = backend
        self.status = QuizStatus.LOADING
        self.plan: list[int] = []
        self.cursor = 0
        self.score = 0
        self.attempted = 0
        self.error: Optional[StoreUnavailable] = None
        # per-question state
        self.current: Optional[FlashcardDetail] = None
        self.choices: list[str] = []
        self.pending_choice = ""
        self.outcome: Optional[QuestionOutcome] = None
        self.revealed_answer: Optional[str] = None
        self._lock = asyncio.Lock()
        self.log = bind(logger, project=context.project_id, session=self.id)

    # Derived flags ------------------------------------------------------
    @property
    def is_terminal(self) -> bool:
        return self.status in (QuizStatus.FINISHED, QuizStatus.EMPTY)

    @property
    def can_submit(self) -> bool:
        return (
            self.error is None
            and self.status == QuizStatus.PRESENTING
            and self.pending_choice != ""
        )

    @property
    def can_advance(self) -> bool:
        return (
            self.error is None
            and self.status == QuizStatus.EVALUATED
            and self.attempted < len(self.plan)
        )

    @property
    def awaiting_finish(self) -> bool:
        return self.status == QuizStatus.EVALUATED and self.attempted == len(self.plan)

    # Session lifecycle --------------------------------------------------
    async def start(self) -> QuizStatus:
        """Draw the plan and load the first question.

        Raises StoreUnavailable (also kept on ``self.error``) if a fetch fails;
        the session then stays in ``loading``.
        """
        async with self._lock:
            if self.status != QuizStatus.LOADING or self.plan:
                return self.status
            try:
                self.plan = await self.backend.plan_order(self.context.project_id)
            except StoreUnavailable as e:
                self._fail(e, "Loading the quiz plan failed")
                raise

            if not self.plan:
                self.status = QuizStatus.EMPTY
                self.log.info("No flashcards available")
                return self.status

            try:
                detail, choices = await self._fetch_question(0)
            except StoreUnavailable as e:
                self._fail(e, f"Loading flashcard {self.plan[0]} failed")
                raise
            self._show_question(0, detail, choices)
            self.status = QuizStatus.PRESENTING
            self.log.info(f"Quiz started with {len(self.plan)} flashcards")
            return self.status

    async def retry(self) -> "QuizSession":
        """Start a brand-new session with the same context.

        Only available once this session is over (finished or empty) or halted
        by a store error; otherwise this session is returned unchanged.
        """
        if not self.is_terminal and self.error is None:
            return self
        session = QuizSession(self.context, self.backend)
        self.log.info(f"Retrying as session {session.id}")
        await session.start()
        return session

    def end(self) -> QuizStatus:
        """End the quiz now; only questions evaluated so far are scored."""
        if self.status in (QuizStatus.PRESENTING, QuizStatus.EVALUATED):
            self.status = QuizStatus.FINISHED
            self.pending_choice = ""
            self.log.info(f"Quiz finished: {self.score} of {self.attempted} correct")
        return self.status

    # Question flow ------------------------------------------------------
    def select(self, choice: str) -> None:
        if self.error is not None or self.status != QuizStatus.PRESENTING:
            return
        if choice not in self.choices:
            self.log.debug(f"Ignoring unknown choice {choice!r}")
            return
        self.pending_choice = choice

    def submit(self) -> Optional[QuestionOutcome]:
        """Score the pending choice. Inert (returns None) when nothing is selected."""
        if not self.can_submit or self.current is None:
            return None
        self.attempted += 1
        if self.pending_choice == self.current.answer:
            self.score += 1
            self.outcome = QuestionOutcome.CORRECT
            self.revealed_answer = None
        else:
            self.outcome = QuestionOutcome.INCORRECT
            self.revealed_answer = self.current.answer
        self.status = QuizStatus.EVALUATED
        return self.outcome

    async def next(self) -> QuizStatus:
        """Move to the next planned flashcard once the current one is evaluated."""
        async with self._lock:
            if not self.can_advance:
                return self.status
            index = self.cursor + 1
            try:
                detail, choices = await self._fetch_question(index)
            except StoreUnavailable as e:
                if self.status != QuizStatus.EVALUATED:
                    self.log.debug(f"Dropping failed fetch after quiz ended: {e}")
                    return self.status
                self._fail(e, f"Loading flashcard {self.plan[index]} failed")
                raise
            # end() may have run while the fetch was pending
            if self.status != QuizStatus.EVALUATED:
                return self.status
            self._show_question(index, detail, choices)
            self.status = QuizStatus.PRESENTING
            return self.status

    async def _fetch_question(self, index: int) -> tuple[FlashcardDetail, list[str]]:
        flashcard_id = self.plan[index]
        detail = await self.backend.get_flashcard_detail(flashcard_id)
        choices = await self.backend.plan_choices(
            self.context.project_id,
            flashcard_id,
            detail.answer,
            self.context.num_choices,
        )
        return detail, choices

    def _show_question(
        self, index: int, detail: FlashcardDetail, choices: list[str]
    ) -> None:
        self.cursor = index
        self.current = detail
        self.choices = choices
        self.pending_choice = ""
        self.outcome = None
        self.revealed_answer = None

    def _fail(self, error: StoreUnavailable, message: str) -> None:
        self.error = error
        self.log.error(f"{message}: {error}")

    # Rendering ----------------------------------------------------------
    def snapshot(self) -> QuizSnapshot:
        showing_question = self.status in (QuizStatus.PRESENTING, QuizStatus.EVALUATED)
        current = self.current if showing_question else None
        return QuizSnapshot(
            status=self.status,
            project_name=self.context.project_name,
            question_number=(self.cursor + 1) if showing_question else 0,
            total_questions=len(self.plan),
            file_name=current.file_name if current else None,
            audio=current.audio if current else None,
            choices=list(self.choices) if showing_question else [],
            chosen_answer=(self.pending_choice or None) if showing_question else None,
            outcome=self.outcome if self.status == QuizStatus.EVALUATED else None,
            correct_answer=(
                self.revealed_answer if self.status == QuizStatus.EVALUATED else None
            ),
            score=self.score,
            attempted=self.attempted,
            can_submit=self.can_submit,
            can_advance=self.can_advance,
            awaiting_finish=self.awaiting_finish,
            error=str(self.error) if self.error else None,
        )
