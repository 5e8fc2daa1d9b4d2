"""Pydantic DTOs (Data Transfer Objects) for the User feature."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from records_api.domain.entities import UserStatus

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
AGE_MIN = 0
AGE_MAX = 150


class UserCreate(BaseModel):
    """Schema for creating a new user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, examples=["Ada Lovelace"])
    email: str = Field(
        ..., min_length=1, max_length=255, pattern=EMAIL_PATTERN,
        examples=["ada@example.com"],
    )
    age: int | None = Field(None, ge=AGE_MIN, le=AGE_MAX, examples=[36])
    status: UserStatus = UserStatus.ACTIVE

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return UserStatus.ACTIVE if value is None else value


class UserUpdate(BaseModel):
    """Schema for updating an existing user — all fields optional.

    Omitted fields are left untouched. An explicit null is rejected for
    everything except ``age``, where it clears the stored value.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(None, min_length=1, max_length=255)
    email: str = Field(None, min_length=1, max_length=255, pattern=EMAIL_PATTERN)
    age: int | None = Field(None, ge=AGE_MIN, le=AGE_MAX)
    status: UserStatus = Field(None)


class UserResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    name: str
    email: str
    age: int | None
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaginationResponse(BaseModel):
    """Pagination metadata attached to list responses."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    total: int
    limit: int
    offset: int
    has_more: bool = Field(..., alias="hasMore")


class UserEnvelope(BaseModel):
    """Envelope wrapping a single user."""

    success: bool = True
    message: str | None = None
    data: UserResponse


class UserListEnvelope(BaseModel):
    """Envelope wrapping a page of users."""

    success: bool = True
    data: list[UserResponse]
    pagination: PaginationResponse


class MessageEnvelope(BaseModel):
    """Envelope carrying only a message — used for deletes and failures."""

    success: bool
    message: str
    error: str | None = None
