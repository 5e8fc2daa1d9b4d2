"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.application.services import UserService
from records_api.infrastructure.database.session import get_db_session
from records_api.infrastructure.database.repositories import SQLAlchemyUserRepository


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserService, None]:
    """Provides a UserService instance with its repository wired up."""
    repository = SQLAlchemyUserRepository(session)
    yield UserService(repository)
