"""Concrete repository implementation for User backed by SQLAlchemy."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.application.interfaces import UserRepository
from records_api.domain.entities import (
    NewUser,
    User,
    UserChanges,
    UserFilters,
    UserStatus,
    build_predicates,
)
from records_api.domain.exceptions import ConstraintError, ConstraintViolation, StorageError
from records_api.infrastructure.database.models import UserModel
from records_api.infrastructure.database.query_compiler import compile_predicates

logger = logging.getLogger(__name__)

# Driver messages naming the unique email constraint (SQLite, PostgreSQL).
_DUPLICATE_EMAIL_MARKERS = ("UNIQUE constraint failed: users.email", "uq_users_email")


def _is_duplicate_email(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in _DUPLICATE_EMAIL_MARKERS)


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions.

    Every write commits on its own, so each insert, update or delete is a
    single-row transaction. Rows are always re-read after a write so callers
    see the values storage actually holds.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        """Map ORM model → domain entity."""
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            age=model.age,
            status=UserStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply_filters(self, stmt: Select, filters: UserFilters) -> Select:
        """Shared by get_all and count so both see identical predicates."""
        clauses = compile_predicates(UserModel, build_predicates(filters))
        return stmt.where(*clauses) if clauses else stmt

    @asynccontextmanager
    async def _storage(self, operation: str) -> AsyncIterator[None]:
        """Wrap unexpected driver failures into an opaque StorageError."""
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("Storage failure during %s", operation)
            await self._session.rollback()
            raise StorageError(operation) from exc

    async def _commit(self, email: str | None) -> None:
        """Commit pending changes, translating a unique-email clash."""
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            if email is not None and _is_duplicate_email(exc):
                logger.warning("Rejected write: email '%s' already exists", email)
                raise ConstraintError(
                    ConstraintViolation.DUPLICATE_EMAIL, "email", email
                ) from exc
            raise

    async def get_by_id(self, user_id: int) -> User | None:
        async with self._storage("get_by_id"):
            model = await self._session.get(UserModel, user_id, populate_existing=True)
        return self._to_entity(model) if model else None

    async def get_all(self, filters: UserFilters) -> list[User]:
        stmt = self._apply_filters(select(UserModel), filters).order_by(
            UserModel.created_at.desc(), UserModel.id.desc()
        )
        if filters.limit is not None:
            stmt = stmt.limit(filters.limit)
        if filters.offset:
            stmt = stmt.offset(filters.offset)

        async with self._storage("get_all"):
            result = await self._session.execute(
                stmt.execution_options(populate_existing=True)
            )
            models = result.scalars().all()
        return [self._to_entity(model) for model in models]

    async def count(self, filters: UserFilters) -> int:
        stmt = self._apply_filters(select(func.count()).select_from(UserModel), filters)
        async with self._storage("count"):
            result = await self._session.execute(stmt)
            return result.scalar_one()

    async def create(self, new_user: NewUser) -> User:
        now = datetime.now(timezone.utc)
        model = UserModel(
            name=new_user.name,
            email=new_user.email,
            age=new_user.age,
            status=new_user.status.value,
            created_at=now,
            updated_at=now,
        )
        async with self._storage("create"):
            self._session.add(model)
            await self._commit(email=new_user.email)
            user_id = model.id

        logger.info("Created user %d", user_id)
        created = await self.get_by_id(user_id)
        if created is None:
            raise StorageError("create")
        return created

    async def update(self, user_id: int, changes: UserChanges) -> User | None:
        async with self._storage("update"):
            model = await self._session.get(UserModel, user_id, populate_existing=True)
            if model is None:
                return None

            if changes.is_empty:
                return self._to_entity(model)

            supplied = changes.supplied()

            for field_name, value in supplied.items():
                if isinstance(value, UserStatus):
                    value = value.value
                setattr(model, field_name, value)
            model.updated_at = datetime.now(timezone.utc)
            await self._commit(email=supplied.get("email"))

        logger.info("Updated user %d (%s)", user_id, ", ".join(sorted(supplied)))
        return await self.get_by_id(user_id)

    async def delete(self, user_id: int) -> bool:
        async with self._storage("delete"):
            model = await self._session.get(UserModel, user_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.commit()

        logger.info("Deleted user %d", user_id)
        return True
