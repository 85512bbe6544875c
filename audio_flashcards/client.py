"""HTTP client for the audio flashcards data-access service."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, Optional

import httpx

from audio_flashcards.apis.flashcards.schemas import FlashcardDetailRead, FlashcardRead
from audio_flashcards.apis.projects.schemas import ProjectRead
from audio_flashcards.core.config import settings
from audio_flashcards.core.logging import get_logger
from audio_flashcards.modules.audio import media_type_for
from audio_flashcards.modules.quiz.errors import StoreUnavailable
from audio_flashcards.modules.quiz.models import FlashcardDetail

logger = get_logger(__name__)


class FlashcardsClient:
    """Async client for the local data-access service.

    CRUD methods raise ``httpx.HTTPStatusError`` for error responses. The quiz
    methods (``plan_order``, ``plan_choices``, ``get_flashcard_detail``) make
    the client usable as a quiz session backend and raise ``StoreUnavailable``
    on any transport or HTTP failure instead.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.client.base_url).rstrip("/")
        self.prefix = f"/{settings.app.version}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.client.timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "FlashcardsClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, f"{self.prefix}{path}", **kwargs)
        response.raise_for_status()
        return response

    async def _store_request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise StoreUnavailable(str(e)) from e

    async def health(self) -> dict:
        response = await self._client.get("/")
        response.raise_for_status()
        return response.json()

    # --- Project endpoints ---

    async def list_projects(self) -> list[ProjectRead]:
        response = await self._request("GET", "/projects")
        return [ProjectRead.model_validate(p) for p in response.json()]

    async def get_project(self, project_id: int) -> ProjectRead:
        response = await self._request("GET", f"/projects/{project_id}")
        return ProjectRead.model_validate(response.json())

    async def create_project(self, name: str, description: str = "") -> ProjectRead:
        response = await self._request(
            "POST", "/projects", json={"name": name, "description": description}
        )
        return ProjectRead.model_validate(response.json())

    async def update_project(
        self, project_id: int, name: str, description: str = ""
    ) -> ProjectRead:
        response = await self._request(
            "PUT",
            f"/projects/{project_id}",
            json={"name": name, "description": description},
        )
        return ProjectRead.model_validate(response.json())

    async def delete_project(self, project_id: int) -> None:
        """Delete a project and all of its flashcards."""
        await self._request("DELETE", f"/projects/{project_id}")

    # --- Flashcard endpoints ---

    async def list_flashcards(self, project_id: int) -> list[FlashcardRead]:
        response = await self._request("GET", f"/projects/{project_id}/flashcards")
        return [FlashcardRead.model_validate(c) for c in response.json()]

    async def get_flashcard(self, flashcard_id: int) -> FlashcardDetailRead:
        response = await self._request("GET", f"/flashcards/{flashcard_id}")
        return FlashcardDetailRead.model_validate(response.json())

    async def download_audio(self, flashcard_id: int) -> bytes:
        response = await self._request("GET", f"/flashcards/{flashcard_id}/audio")
        return response.content

    async def add_flashcard(
        self,
        project_id: int,
        audio_path: Path,
        answer: str,
    ) -> FlashcardRead:
        audio_path = Path(audio_path)
        files = {
            "file": (
                audio_path.name,
                audio_path.read_bytes(),
                media_type_for(audio_path.name),
            )
        }
        response = await self._request(
            "POST",
            f"/projects/{project_id}/flashcards",
            data={"answer": answer},
            files=files,
        )
        return FlashcardRead.model_validate(response.json())

    async def update_flashcard(
        self,
        flashcard_id: int,
        answer: str,
        audio_path: Optional[Path] = None,
    ) -> FlashcardRead:
        """Update the answer; the stored clip is replaced only if a path is given."""
        kwargs: dict[str, Any] = {"data": {"answer": answer}}
        if audio_path is not None:
            audio_path = Path(audio_path)
            kwargs["files"] = {
                "file": (
                    audio_path.name,
                    audio_path.read_bytes(),
                    media_type_for(audio_path.name),
                )
            }
        response = await self._request("PUT", f"/flashcards/{flashcard_id}", **kwargs)
        return FlashcardRead.model_validate(response.json())

    async def delete_flashcard(self, flashcard_id: int) -> None:
        await self._request("DELETE", f"/flashcards/{flashcard_id}")

    # --- Quiz backend ---

    async def plan_order(self, project_id: int) -> list[int]:
        response = await self._store_request("GET", f"/quiz/projects/{project_id}/order")
        return list(response.json()["flashcard_ids"])

    async def plan_choices(
        self,
        project_id: int,
        flashcard_id: int,
        correct_answer: str,
        num_choices: int,
    ) -> list[str]:
        response = await self._store_request(
            "POST",
            "/quiz/choices",
            json={
                "project_id": project_id,
                "flashcard_id": flashcard_id,
                "answer": correct_answer,
                "num_choices": num_choices,
            },
        )
        return list(response.json()["choices"])

    async def get_flashcard_detail(self, flashcard_id: int) -> FlashcardDetail:
        response = await self._store_request("GET", f"/flashcards/{flashcard_id}")
        data = FlashcardDetailRead.model_validate(response.json())
        return FlashcardDetail(
            file_name=data.file_name,
            audio=base64.b64decode(data.audio_base64),
            answer=data.answer,
        )
