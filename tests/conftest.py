from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from services.accounts_service.resource import AccountsResource
from services.events_service.resource import EventsResource


@pytest_asyncio.fixture
async def db_session(clean_schema, suite_settings) -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session on a freshly migrated test database.

    The engine is disposed before ``clean_schema`` rolls the migrations back,
    so no connection holds locks on the tables being dropped.
    """
    engine = create_async_engine(
        suite_settings.database_url, future=True, poolclass=NullPool
    )
    session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False
    )
    session = session_factory()

    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture
async def events(db_session) -> EventsResource:
    return EventsResource(db_session)


@pytest_asyncio.fixture
async def accounts(db_session) -> AccountsResource:
    return AccountsResource(db_session)
