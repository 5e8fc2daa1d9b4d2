"""Application service (use case) for User operations."""

from records_api.application.interfaces import UserRepository
from records_api.application.services.user_normalizer import DEFAULT_LIMIT, DEFAULT_OFFSET
from records_api.domain.entities import (
    NewUser,
    Pagination,
    User,
    UserChanges,
    UserFilters,
    UserPage,
)
from records_api.domain.exceptions import EntityNotFoundError


class UserService:
    """Orchestrates user CRUD logic. Depends on the repository port (DI).

    Inputs arrive already normalized; this layer only turns absence into
    ``EntityNotFoundError`` and pairs listings with their pagination totals.
    """

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def get_user(self, user_id: int) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def list_users(self, filters: UserFilters) -> UserPage:
        users = await self._repository.get_all(filters)
        # Not snapshot-consistent with the page above; a concurrent write may
        # make the total disagree with the page contents.
        total = await self._repository.count(filters)
        pagination = Pagination(
            total=total,
            limit=filters.limit if filters.limit is not None else DEFAULT_LIMIT,
            offset=filters.offset if filters.offset is not None else DEFAULT_OFFSET,
        )
        return UserPage(users=users, pagination=pagination)

    async def create_user(self, new_user: NewUser) -> User:
        return await self._repository.create(new_user)

    async def update_user(self, user_id: int, changes: UserChanges) -> User:
        user = await self._repository.update(user_id, changes)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def delete_user(self, user_id: int) -> None:
        deleted = await self._repository.delete(user_id)
        if not deleted:
            raise EntityNotFoundError("User", user_id)
