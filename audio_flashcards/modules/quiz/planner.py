"""Quiz planning: randomized flashcard order and multiple-choice answer sets.

Provides:
- shuffle(items, rng) -> the same list, permuted in place (Fisher-Yates)
- QuizPlanner.plan_order(project_id) -> list[int]
- QuizPlanner.plan_choices(project_id, flashcard_id, correct_answer, num_choices) -> list[str]
"""

from __future__ import annotations

import random
from typing import Optional, TypeVar

from audio_flashcards.core.logging import get_logger
from audio_flashcards.modules.quiz.store import QuizStore


logger = get_logger(__name__)

T = TypeVar("T")


def shuffle(items: list[T], rng: Optional[random.Random] = None) -> list[T]:
    """Uniformly permute ``items`` in place and return it."""
    rand = rng or random
    for i in range(len(items) - 1, 0, -1):
        j = rand.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


class QuizPlanner:
    """Builds the traversal order and per-question choice sets from a store."""

    def __init__(self, store: QuizStore, *, rng: Optional[random.Random] = None) -> None:
        self.store = store
        self.rng = rng or random.Random()

    async def plan_order(self, project_id: int) -> list[int]:
        ids = await self.store.list_flashcard_ids(project_id)
        order = shuffle(list(ids), self.rng)
        logger.debug(f"Planned {len(order)} flashcards", extra={"project": project_id})
        return order

    async def plan_choices(
        self,
        project_id: int,
        flashcard_id: int,
        correct_answer: str,
        num_choices: int,
    ) -> list[str]:
        pool = shuffle(
            list(await self.store.list_other_answers(project_id, flashcard_id)),
            self.rng,
        )
        # Keep one slot for the correct answer
        if len(pool) >= num_choices:
            pool = pool[: max(num_choices - 1, 0)]
        pool.append(correct_answer)
        return shuffle(pool, self.rng)
