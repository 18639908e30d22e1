import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from boom_booking.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def engine_options(settings: Settings) -> dict[str, Any]:
    """Pool sizing per environment. SQLite manages its own pool."""
    options: dict[str, Any] = {"echo": settings.sql_echo}
    if settings.database_url.startswith("sqlite"):
        return options

    options["pool_pre_ping"] = True
    if settings.is_production:
        options.update(pool_size=20, max_overflow=50, pool_timeout=60, pool_recycle=1800)
    else:
        options.update(pool_size=10, max_overflow=20, pool_timeout=30)
    return options


class Database:
    """
    Owns one async engine and its session factory.

    Constructed by the process entry point (the FastAPI lifespan, or a script),
    handed to request handlers through ``app.state.database`` and disposed at
    shutdown.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine = create_async_engine(url, **engine_kwargs)
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, **engine_options(settings))

    async def create_all(self) -> None:
        # Deferred import registers every model on Base.metadata
        import boom_booking.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")

    async def ping(self) -> bool:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed.")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async with database.sessionmaker() as db:
        try:
            yield db
        except SQLAlchemyError as e:
            logger.error("Database session error: %s", e)
            await db.rollback()
            raise
