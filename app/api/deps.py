"""API dependencies — database session and record store."""
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_factory
from app.services.property_store import PropertyStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session for request scope."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_store(db: AsyncSession = Depends(get_db, scope="function")) -> PropertyStore:
    """Record store bound to the request's session.

    The session is committed before the response is sent.
    """
    return PropertyStore(db)
