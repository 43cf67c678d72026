"""Pydantic schemas for user, login and role-change endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Schema for registering or admin-creating a user."""

    email: EmailStr
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class UserUpdate(BaseModel):
    """
    Schema for updating a user (profile edit or admin edit).

    Partial update: omitted or null fields are left unchanged. A supplied password
    is re-hashed before storage.
    """

    email: EmailStr | None = None
    username: str | None = Field(default=None, min_length=1, max_length=255)
    password: str | None = Field(default=None, min_length=1, max_length=72)


class UserResponse(BaseModel):
    """
    User as returned by the API and stored in the cache.

    The password hash is deliberately not part of this schema.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    """Schema for email/password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Access token issued on successful login."""

    access_token: str
    token_type: str = "bearer"


class ChangeRoleItem(BaseModel):
    """
    A single role attach/detach instruction.

    action must be "add" or "remove"; anything else is rejected by the service
    with a 400 and rolls back the whole change.
    """

    id: UUID
    action: str


class ChangeRoleRequest(BaseModel):
    """Ordered list of role changes applied atomically to one user."""

    items: list[ChangeRoleItem] = Field(..., min_length=1)
