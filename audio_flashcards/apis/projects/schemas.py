from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ProjectWrite(BaseModel):
    name: str = Field(..., min_length=1, description="Project name")
    description: str = Field(default="", description="Free-form description")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ProjectRead(BaseModel):
    id: int
    name: str
    description: str
    created_at: str | None = None
