from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from libs.db.config import AsyncSessionLocal


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """
    Yield a session, rolling back whatever is uncommitted when the block raises.

    Errors are re-raised unchanged; callers decide how to report them.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
