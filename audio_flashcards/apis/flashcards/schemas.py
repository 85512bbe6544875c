from __future__ import annotations

from pydantic import BaseModel


class FlashcardRead(BaseModel):
    id: int
    project_id: int
    file_name: str
    answer: str
    size: int
    media_type: str
    created_at: str | None = None


class FlashcardDetailRead(FlashcardRead):
    audio_base64: str
