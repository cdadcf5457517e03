"""
Database engine lifecycle and article sessions.
"""

import logging
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.pool import NullPool

from newsdesk.utils.config import get_database_url
from newsdesk.db.models import Base
from newsdesk.db.articles import ArticleRepository

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    # SQLite files don't benefit from pooling
    if "sqlite" in database_url:
        return {"poolclass": NullPool}
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }


class Database:
    """
    Owns the async engine and hands out article repositories bound to a
    transaction.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or get_database_url()
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def connect(self) -> None:
        """Create the engine and the articles table if it is missing."""
        self.engine = create_async_engine(self.database_url, **_engine_options(self.database_url))
        self.session_factory = async_sessionmaker(bind=self.engine, expire_on_commit=False)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database connected and schema ready")

    async def disconnect(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Database connections closed")

    async def ping(self) -> bool:
        """True when a trivial query succeeds."""
        if not self.engine:
            return False

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    @asynccontextmanager
    async def articles(self) -> AsyncGenerator[ArticleRepository, None]:
        """
        Yield an article repository whose changes commit when the block
        exits cleanly and roll back otherwise.
        """
        if not self.session_factory:
            raise RuntimeError("Database is not connected")

        async with self.session_factory() as session:
            try:
                yield ArticleRepository(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise


database = Database()


async def get_articles() -> AsyncGenerator[ArticleRepository, None]:
    """FastAPI dependency providing an article repository."""
    async with database.articles() as articles:
        yield articles
