from __future__ import annotations

import base64
from typing import Annotated, Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Response,
    UploadFile,
    status,
)
from sqlalchemy.ext.asyncio import AsyncSession

from audio_flashcards.core.config import settings
from audio_flashcards.core.db.base import get_session
from audio_flashcards.core.db.schemas.flashcards import Flashcard
from audio_flashcards.core.db_services import FlashcardService, ProjectService
from audio_flashcards.core.logging import get_logger
from audio_flashcards.modules.audio import (
    AudioTooLarge,
    AudioValidationError,
    UnsupportedAudioType,
    media_type_for,
    validate_audio,
)
from .schemas import FlashcardDetailRead, FlashcardRead


router = APIRouter()
logger = get_logger(__name__)


def _to_read(c: Flashcard) -> FlashcardRead:
    return FlashcardRead(
        id=c.id,
        project_id=c.project_id,
        file_name=c.file_name,
        answer=c.answer,
        size=len(c.audio or b""),
        media_type=media_type_for(c.file_name),
        created_at=c.created_at.isoformat() if c.created_at else None,
    )


def _clean_answer(answer: str) -> str:
    answer = answer.strip()
    if not answer:
        raise HTTPException(status_code=422, detail="Answer must not be blank")
    return answer


async def _read_upload(file: UploadFile) -> tuple[str, bytes]:
    """Read and validate an uploaded clip; returns (file_name, bytes)."""
    file_name = file.filename or ""
    # One byte past the limit is enough to detect an oversized upload
    data = await file.read(settings.audio.max_file_size + 1)
    try:
        validate_audio(file_name, file.content_type, data)
    except UnsupportedAudioType as e:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, detail=str(e)
        )
    except AudioTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))
    except AudioValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return file_name, data


@router.get(
    f"/{settings.app.version}/projects/{{project_id:int}}/flashcards",
    response_model=list[FlashcardRead],
    tags=["flashcards"],
)
async def list_flashcards(
    project_id: int,
    session: AsyncSession = Depends(get_session),
) -> list[FlashcardRead]:
    project = await ProjectService(session).get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    cards = await FlashcardService(session).list_flashcards(project_id)
    return [_to_read(c) for c in cards]


@router.post(
    f"/{settings.app.version}/projects/{{project_id:int}}/flashcards",
    response_model=FlashcardRead,
    status_code=status.HTTP_201_CREATED,
    tags=["flashcards"],
)
async def create_flashcard(
    project_id: int,
    file: Annotated[UploadFile, File(...)],
    answer: Annotated[str, Form(...)],
    session: AsyncSession = Depends(get_session),
) -> FlashcardRead:
    project = await ProjectService(session).get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    answer = _clean_answer(answer)
    file_name, data = await _read_upload(file)
    card = await FlashcardService(session).create_flashcard(
        project_id=project_id,
        file_name=file_name,
        audio=data,
        answer=answer,
    )
    return _to_read(card)


@router.get(
    f"/{settings.app.version}/flashcards/{{flashcard_id:int}}",
    response_model=FlashcardDetailRead,
    tags=["flashcards"],
)
async def get_flashcard(
    flashcard_id: int,
    session: AsyncSession = Depends(get_session),
) -> FlashcardDetailRead:
    card = await FlashcardService(session).get_flashcard(flashcard_id)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return FlashcardDetailRead(
        **_to_read(card).model_dump(),
        audio_base64=base64.b64encode(card.audio).decode("ascii"),
    )


@router.get(
    f"/{settings.app.version}/flashcards/{{flashcard_id:int}}/audio",
    tags=["flashcards"],
)
async def get_flashcard_audio(
    flashcard_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    card = await FlashcardService(session).get_flashcard(flashcard_id)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return Response(
        content=card.audio,
        media_type=media_type_for(card.file_name),
        headers={"Content-Disposition": f'inline; filename="{card.file_name}"'},
    )


@router.put(
    f"/{settings.app.version}/flashcards/{{flashcard_id:int}}",
    response_model=FlashcardRead,
    tags=["flashcards"],
)
async def update_flashcard(
    flashcard_id: int,
    answer: Annotated[str, Form(...)],
    file: Annotated[Optional[UploadFile], File()] = None,
    session: AsyncSession = Depends(get_session),
) -> FlashcardRead:
    answer = _clean_answer(answer)
    file_name: Optional[str] = None
    data: Optional[bytes] = None
    if file is not None:
        file_name, data = await _read_upload(file)
    card = await FlashcardService(session).update_flashcard(
        flashcard_id, answer=answer, file_name=file_name, audio=data
    )
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return _to_read(card)


@router.delete(
    f"/{settings.app.version}/flashcards/{{flashcard_id:int}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["flashcards"],
)
async def delete_flashcard(
    flashcard_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    deleted = await FlashcardService(session).delete_flashcard(flashcard_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    logger.info(f"Flashcard {flashcard_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
