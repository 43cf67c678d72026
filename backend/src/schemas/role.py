"""Pydantic schemas for role endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RoleCreate(BaseModel):
    """Schema for creating a new role."""

    name: str = Field(..., min_length=1, max_length=255)
    auth_level: int = Field(..., ge=1)

    @field_validator("name")
    @classmethod
    def check_name_not_empty(cls, v: str) -> str:
        """Validate name is not blank."""
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v


class RoleUpdate(BaseModel):
    """Schema for updating a role. Only supplied fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    auth_level: int | None = Field(default=None, ge=1)


class RoleResponse(BaseModel):
    """Role as returned by the API and stored in the cache."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    auth_level: int
    created_at: datetime
    updated_at: datetime
