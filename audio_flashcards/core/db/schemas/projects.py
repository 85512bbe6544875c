from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from audio_flashcards.core.db.base import Base

if TYPE_CHECKING:
    from .flashcards import Flashcard


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    flashcards: Mapped[list["Flashcard"]] = relationship(
        "Flashcard",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["Project"]
