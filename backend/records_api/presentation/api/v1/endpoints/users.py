"""User CRUD endpoints.

Raw query parameters and bodies are passed through the normalizer before they
reach the service; domain errors are mapped to HTTP responses by the exception
handlers registered in ``records_api.main``.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from records_api.application.schemas import (
    MessageEnvelope,
    PaginationResponse,
    UserEnvelope,
    UserListEnvelope,
    UserResponse,
)
from records_api.application.services import (
    UserService,
    normalize_create,
    normalize_filters,
    normalize_update,
    normalize_user_id,
)
from records_api.infrastructure.dependencies import get_user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListEnvelope)
async def list_users(
    request: Request,
    service: UserService = Depends(get_user_service),
) -> UserListEnvelope:
    """List users filtered by name, email, status and age range, newest first."""
    filters = normalize_filters(request.query_params)
    page = await service.list_users(filters)
    return UserListEnvelope(
        data=[UserResponse.model_validate(u, from_attributes=True) for u in page.users],
        pagination=PaginationResponse(
            total=page.pagination.total,
            limit=page.pagination.limit,
            offset=page.pagination.offset,
            has_more=page.pagination.has_more,
        ),
    )


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Retrieve a single user by ID."""
    user = await service.get_user(normalize_user_id(user_id))
    return UserEnvelope(data=UserResponse.model_validate(user, from_attributes=True))


@router.post(
    "",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Create a new user."""
    user = await service.create_user(normalize_create(payload))
    return UserEnvelope(
        message="User created successfully",
        data=UserResponse.model_validate(user, from_attributes=True),
    )


@router.put("/{user_id}", response_model=UserEnvelope)
async def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Apply a partial update to an existing user."""
    parsed_id = normalize_user_id(user_id)
    user = await service.update_user(parsed_id, normalize_update(payload))
    return UserEnvelope(
        message="User updated successfully",
        data=UserResponse.model_validate(user, from_attributes=True),
    )


@router.delete("/{user_id}", response_model=MessageEnvelope, response_model_exclude_none=True)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> MessageEnvelope:
    """Delete a user by ID."""
    await service.delete_user(normalize_user_id(user_id))
    return MessageEnvelope(success=True, message="User deleted successfully")
