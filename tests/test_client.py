"""Tests for FlashcardsClient against the in-process app and failing transports."""

import httpx
import pytest
import pytest_asyncio

from audio_flashcards.client import FlashcardsClient
from audio_flashcards.modules.quiz import QuizContext, QuizSession, QuizStatus, StoreUnavailable


@pytest_asyncio.fixture
async def client(app):
    async with FlashcardsClient(
        "http://test", transport=httpx.ASGITransport(app=app)
    ) as c:
        yield c


@pytest.fixture
def clip(tmp_path):
    path = tmp_path / "robin.mp3"
    path.write_bytes(b"ID3robin")
    return path


class TestClientCrud:
    async def test_health(self, client):
        assert (await client.health())["status"] == "ok"

    async def test_project_roundtrip(self, client):
        created = await client.create_project("Birds", "calls")
        updated = await client.update_project(created.id, "Songbirds")

        assert updated.name == "Songbirds"
        assert [p.name for p in await client.list_projects()] == ["Songbirds"]

        await client.delete_project(created.id)
        assert await client.list_projects() == []

    async def test_missing_project_raises_status_error(self, client):
        with pytest.raises(httpx.HTTPStatusError) as exc:
            await client.get_project(999)
        assert exc.value.response.status_code == 404

    async def test_flashcard_lifecycle(self, client, clip, tmp_path):
        project = await client.create_project("Birds")

        card = await client.add_flashcard(project.id, clip, "robin")
        assert card.media_type == "audio/mpeg"
        assert await client.download_audio(card.id) == b"ID3robin"

        replacement = tmp_path / "robin.wav"
        replacement.write_bytes(b"RIFFrobin")
        edited = await client.update_flashcard(card.id, "American robin", audio_path=replacement)
        assert edited.file_name == "robin.wav"

        renamed = await client.update_flashcard(card.id, "robin")
        assert renamed.file_name == "robin.wav"
        assert await client.download_audio(card.id) == b"RIFFrobin"

        await client.delete_flashcard(card.id)
        assert await client.list_flashcards(project.id) == []

    async def test_rejected_upload(self, client, tmp_path):
        project = await client.create_project("Birds")
        notes = tmp_path / "notes.txt"
        notes.write_text("not audio")

        with pytest.raises(httpx.HTTPStatusError) as exc:
            await client.add_flashcard(project.id, notes, "robin")
        assert exc.value.response.status_code == 415


class TestClientAsQuizBackend:
    async def test_full_quiz_over_http(self, client, clip):
        project = await client.create_project("Birds")
        for answer in ("robin", "wren"):
            await client.add_flashcard(project.id, clip, answer)

        session = QuizSession(
            QuizContext(project_id=project.id, project_name=project.name), client
        )
        await session.start()
        assert session.current.audio == b"ID3robin"

        session.select(session.current.answer)
        session.submit()
        await session.next()
        session.select(session.current.answer)
        session.submit()
        session.end()

        assert session.status == QuizStatus.FINISHED
        assert (session.score, session.attempted) == (2, 2)

    async def test_server_error_is_store_unavailable(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        async with FlashcardsClient("http://test", transport=transport) as client:
            with pytest.raises(StoreUnavailable):
                await client.plan_order(1)

    async def test_connection_error_is_store_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with FlashcardsClient("http://test", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(StoreUnavailable):
                await client.get_flashcard_detail(1)

    async def test_session_records_transport_failure(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        async with FlashcardsClient("http://test", transport=transport) as client:
            session = QuizSession(QuizContext(project_id=1), client)
            with pytest.raises(StoreUnavailable):
                await session.start()

        assert session.snapshot().error is not None
        assert session.status == QuizStatus.LOADING
