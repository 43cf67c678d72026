"""Pydantic schemas for todo endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TodoCreate(BaseModel):
    """Schema for creating a new todo. The owner is always the caller."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=255)
    is_completed: bool = False

    @field_validator("title")
    @classmethod
    def check_title_not_empty(cls, v: str) -> str:
        """Validate title is not blank."""
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v


class TodoUpdate(BaseModel):
    """Schema for updating a todo. Only supplied fields change."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=255)
    is_completed: bool | None = None


class TodoResponse(BaseModel):
    """Todo as returned by the API and stored in the cache."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    is_completed: bool
    user_id: UUID
    created_at: datetime
    updated_at: datetime
