"""Tests for the quiz planning endpoints."""

import random

from audio_flashcards.apis.quiz.main import get_quiz_planner
from audio_flashcards.modules.quiz import QuizPlanner
from tests.conftest import FakeStore, create_project, make_cards, upload_flashcard


async def _seed(http, answers):
    project = await create_project(http)
    ids = []
    for answer in answers:
        ids.append((await upload_flashcard(http, project["id"], answer)).json()["id"])
    return project, ids


class TestOrderEndpoint:
    async def test_order_is_permutation(self, http):
        project, ids = await _seed(http, ["robin", "wren", "jay", "crow"])

        response = await http.get(f"/v1/quiz/projects/{project['id']}/order")

        assert response.status_code == 200
        body = response.json()
        assert body["project_id"] == project["id"]
        assert sorted(body["flashcard_ids"]) == sorted(ids)

    async def test_empty_project(self, http):
        project = await create_project(http)
        response = await http.get(f"/v1/quiz/projects/{project['id']}/order")
        assert response.json()["flashcard_ids"] == []

    async def test_unknown_project_is_empty(self, http):
        response = await http.get("/v1/quiz/projects/999/order")
        assert response.status_code == 200
        assert response.json()["flashcard_ids"] == []


class TestChoicesEndpoint:
    async def test_small_project_offers_all_answers(self, http):
        project, ids = await _seed(http, ["cat", "dog", "bird"])

        response = await http.post(
            "/v1/quiz/choices",
            json={"project_id": project["id"], "flashcard_id": ids[0], "answer": "cat"},
        )

        assert response.status_code == 200
        assert sorted(response.json()["choices"]) == ["bird", "cat", "dog"]

    async def test_num_choices_caps_length(self, http):
        project, ids = await _seed(http, ["a", "b", "c", "d", "e", "f", "g"])

        response = await http.post(
            "/v1/quiz/choices",
            json={
                "project_id": project["id"],
                "flashcard_id": ids[2],
                "answer": "c",
                "num_choices": 3,
            },
        )

        choices = response.json()["choices"]
        assert len(choices) == 3
        assert "c" in choices

    async def test_default_num_choices(self, http):
        project, ids = await _seed(http, [f"bird-{i}" for i in range(9)])

        response = await http.post(
            "/v1/quiz/choices",
            json={"project_id": project["id"], "flashcard_id": ids[0], "answer": "bird-0"},
        )

        assert len(response.json()["choices"]) == 5

    async def test_invalid_num_choices(self, http):
        response = await http.post(
            "/v1/quiz/choices",
            json={"project_id": 1, "flashcard_id": 1, "answer": "a", "num_choices": 0},
        )
        assert response.status_code == 422


class TestStoreUnavailable:
    async def test_store_failure_maps_to_503(self, app, http):
        store = FakeStore(make_cards(["a"]), failing={"list_flashcard_ids", "list_other_answers"})
        app.dependency_overrides[get_quiz_planner] = lambda: QuizPlanner(
            store, rng=random.Random(0)
        )

        order = await http.get("/v1/quiz/projects/1/order")
        choices = await http.post(
            "/v1/quiz/choices",
            json={"project_id": 1, "flashcard_id": 1, "answer": "a"},
        )

        assert order.status_code == 503
        assert order.json() == {"detail": "Store unavailable"}
        assert choices.status_code == 503
