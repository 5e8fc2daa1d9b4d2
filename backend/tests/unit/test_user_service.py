"""Unit tests for the UserService."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from records_api.application.interfaces import UserRepository
from records_api.application.services import UserService
from records_api.domain.entities import (
    NewUser,
    User,
    UserChanges,
    UserFilters,
    UserStatus,
    build_predicates,
)
from records_api.domain.exceptions import (
    ConstraintError,
    ConstraintViolation,
    EntityNotFoundError,
)


class FakeUserRepository(UserRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    def _matching(self, filters: UserFilters) -> list[User]:
        users = list(self._users.values())
        for predicate in build_predicates(filters):
            if predicate.operator == "contains":
                users = [u for u in users if predicate.value in getattr(u, predicate.field_name)]
            elif predicate.operator == "equals":
                users = [u for u in users if u.status.value == predicate.value]
            elif predicate.operator == "gte":
                users = [u for u in users if u.age is not None and u.age >= predicate.value]
            elif predicate.operator == "lte":
                users = [u for u in users if u.age is not None and u.age <= predicate.value]
        return sorted(users, key=lambda u: u.id, reverse=True)

    async def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_all(self, filters: UserFilters) -> list[User]:
        users = self._matching(filters)
        start = filters.offset or 0
        end = start + filters.limit if filters.limit is not None else None
        return users[start:end]

    async def count(self, filters: UserFilters) -> int:
        return len(self._matching(filters))

    async def create(self, new_user: NewUser) -> User:
        if any(u.email == new_user.email for u in self._users.values()):
            raise ConstraintError(ConstraintViolation.DUPLICATE_EMAIL, "email", new_user.email)
        user = User(
            id=self._next_id,
            name=new_user.name,
            email=new_user.email,
            age=new_user.age,
            status=new_user.status,
        )
        self._next_id += 1
        self._users[user.id] = user
        return user

    async def update(self, user_id: int, changes: UserChanges) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        if changes.is_empty:
            return user
        updated = replace(user, **changes.supplied(), updated_at=datetime.now(timezone.utc))
        self._users[user_id] = updated
        return updated

    async def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None


@pytest.fixture
def service() -> UserService:
    return UserService(FakeUserRepository())


@pytest.mark.asyncio
async def test_create_user(service: UserService):
    user = await service.create_user(NewUser(name="Ada", email="ada@example.com"))
    assert user.id is not None
    assert user.status is UserStatus.ACTIVE


@pytest.mark.asyncio
async def test_create_duplicate_email_propagates(service: UserService):
    await service.create_user(NewUser(name="Ada", email="ada@example.com"))
    with pytest.raises(ConstraintError) as exc_info:
        await service.create_user(NewUser(name="Other", email="ada@example.com"))
    assert exc_info.value.kind is ConstraintViolation.DUPLICATE_EMAIL


@pytest.mark.asyncio
async def test_get_user_not_found(service: UserService):
    with pytest.raises(EntityNotFoundError):
        await service.get_user(999)


@pytest.mark.asyncio
async def test_list_users_reports_pagination(service: UserService):
    for i in range(5):
        await service.create_user(NewUser(name=f"User {i}", email=f"u{i}@example.com"))

    page = await service.list_users(UserFilters(limit=2, offset=2))

    assert [u.name for u in page.users] == ["User 2", "User 1"]
    assert page.pagination.total == 5
    assert page.pagination.limit == 2
    assert page.pagination.offset == 2
    assert page.pagination.has_more is True


@pytest.mark.asyncio
async def test_list_users_total_ignores_pagination(service: UserService):
    for i in range(3):
        await service.create_user(
            NewUser(name=f"User {i}", email=f"u{i}@example.com", status=UserStatus.INACTIVE)
        )
    await service.create_user(NewUser(name="Active", email="active@example.com"))

    page = await service.list_users(UserFilters(status=UserStatus.INACTIVE, limit=1, offset=0))

    assert len(page.users) == 1
    assert page.pagination.total == 3


@pytest.mark.asyncio
async def test_list_users_defaults_pagination_metadata(service: UserService):
    page = await service.list_users(UserFilters())
    assert page.pagination.limit == 10
    assert page.pagination.offset == 0
    assert page.pagination.has_more is False


@pytest.mark.asyncio
async def test_update_user(service: UserService):
    created = await service.create_user(NewUser(name="Old", email="old@example.com", age=20))
    updated = await service.update_user(created.id, UserChanges(name="New"))
    assert updated.name == "New"
    assert updated.age == 20


@pytest.mark.asyncio
async def test_update_missing_user(service: UserService):
    with pytest.raises(EntityNotFoundError):
        await service.update_user(404, UserChanges(name="Nobody"))


@pytest.mark.asyncio
async def test_delete_user(service: UserService):
    created = await service.create_user(NewUser(name="Delete Me", email="bye@example.com"))
    await service.delete_user(created.id)
    with pytest.raises(EntityNotFoundError):
        await service.get_user(created.id)


@pytest.mark.asyncio
async def test_delete_missing_user(service: UserService):
    with pytest.raises(EntityNotFoundError):
        await service.delete_user(12345)
