"""Shared fixtures for integration tests — a throwaway SQLite database per test."""

from collections.abc import AsyncIterator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.infrastructure.database import Database
from records_api.infrastructure.database.repositories import SQLAlchemyUserRepository


@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncIterator[Database]:
    db = Database(f"sqlite:///{tmp_path / 'records.sqlite'}")
    await db.open()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def repository(session: AsyncSession) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(session)
