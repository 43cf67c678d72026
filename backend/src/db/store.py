"""Transaction helpers shared by every service."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class Store:
    """
    Hands out database sessions to the services.

    session() is the ambient handle for a single non-transactional operation: the
    work done on it is committed when the block exits. transaction() is an explicit
    transaction shared by several steps: everything inside is committed together or
    rolled back together.

    Repository functions receive whichever handle the caller opened, so the same
    function works in both modes.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Yield an ambient session for one operation."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession]:
        """Yield a session inside one transaction; any exception rolls back every step."""
        async with self._session_factory() as session, session.begin():
            yield session

    async def ping(self) -> bool:
        """Check database connectivity."""
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))
        return True
