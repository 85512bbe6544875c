"""Pytest configuration and fixtures."""

import os
import random
import tempfile
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path

# Keep the default database out of the user's home directory
os.environ.setdefault(
    "DB_PATH", str(Path(tempfile.gettempdir()) / "audio-flashcards-test.sqlite")
)

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from audio_flashcards.apis.quiz.main import get_quiz_planner
from audio_flashcards.core.db.base import Base, get_session
from audio_flashcards.core.db import schemas  # noqa: F401
from audio_flashcards.main import create_app
from audio_flashcards.modules.quiz import (
    FlashcardDetail,
    LocalQuizBackend,
    QuizPlanner,
    StoreUnavailable,
)
from audio_flashcards.modules.quiz.store import DatabaseQuizStore


@dataclass
class FakeCard:
    id: int
    project_id: int
    answer: str
    file_name: str = "clip.mp3"
    audio: bytes = b"ID3-fake-audio"


class FakeStore:
    """In-memory QuizStore; methods named in ``failing`` raise StoreUnavailable."""

    def __init__(self, cards: list[FakeCard], failing: set[str] | None = None) -> None:
        self.cards = {c.id: c for c in cards}
        self.failing = failing or set()
        self.calls: list[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failing:
            raise StoreUnavailable(f"{name} failed")

    async def list_flashcard_ids(self, project_id: int) -> list[int]:
        self._check("list_flashcard_ids")
        return [c.id for c in self.cards.values() if c.project_id == project_id]

    async def get_flashcard_detail(self, flashcard_id: int) -> FlashcardDetail:
        self._check("get_flashcard_detail")
        card = self.cards.get(flashcard_id)
        if card is None:
            raise StoreUnavailable(f"Flashcard {flashcard_id} not found")
        return FlashcardDetail(file_name=card.file_name, audio=card.audio, answer=card.answer)

    async def list_other_answers(self, project_id: int, exclude_flashcard_id: int) -> list[str]:
        self._check("list_other_answers")
        return [
            c.answer
            for c in self.cards.values()
            if c.project_id == project_id and c.id != exclude_flashcard_id
        ]


def make_cards(answers: list[str], project_id: int = 1, start_id: int = 1) -> list[FakeCard]:
    return [
        FakeCard(id=start_id + i, project_id=project_id, answer=a, file_name=f"{a}.mp3")
        for i, a in enumerate(answers)
    ]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_backend(rng: random.Random):
    def _make(cards: list[FakeCard], failing: set[str] | None = None) -> LocalQuizBackend:
        return LocalQuizBackend(FakeStore(cards, failing), rng=rng)

    return _make


@pytest_asyncio.fixture
async def session_maker(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Fresh SQLite database file per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _fk_on(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(engine, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest.fixture
def app(session_maker: async_sessionmaker[AsyncSession]) -> FastAPI:
    application = create_app()

    async def override_get_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_session] = override_get_session
    application.dependency_overrides[get_quiz_planner] = lambda: QuizPlanner(
        DatabaseQuizStore(session_maker), rng=random.Random(99)
    )
    return application


@pytest_asyncio.fixture
async def http(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def create_project(http: httpx.AsyncClient, name: str = "Birds") -> dict:
    response = await http.post("/v1/projects", json={"name": name, "description": "calls"})
    assert response.status_code == 201
    return response.json()


async def upload_flashcard(
    http: httpx.AsyncClient,
    project_id: int,
    answer: str,
    file_name: str | None = None,
    data: bytes = b"ID3-fake-audio",
    content_type: str = "audio/mpeg",
) -> httpx.Response:
    return await http.post(
        f"/v1/projects/{project_id}/flashcards",
        data={"answer": answer},
        files={"file": (file_name or f"{answer}.mp3", data, content_type)},
    )
