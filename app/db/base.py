# app/db/base.py

from __future__ import annotations

import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import settings

log = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


if settings.DATABASE_URL.startswith("sqlite"):
    # One connection per session: sqlite connections must not cross event loops.
    log.info("Using SQLite database (aiosqlite): %s", settings.DATABASE_URL)
    engine = create_async_engine(settings.DATABASE_URL, poolclass=NullPool, echo=False)
else:
    log.info("Using async database: %s...", settings.DATABASE_URL[:25])
    if not settings.DATABASE_URL.startswith("postgresql+asyncpg://"):
        raise ValueError("DATABASE_URL must use 'asyncpg' driver for async operations.")
    engine = create_async_engine(
        settings.DATABASE_URL, echo=(settings.ENVIRONMENT == "dev"), pool_pre_ping=True
    )

async_session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: yields an async session, committing on success and
    rolling back on any exception.
    """
    session = async_session_factory()
    log.debug(">>> get_async_db_session: Session %s created, yielding...", id(session))
    try:
        yield session
        await session.commit()
        log.debug(">>> get_async_db_session: Session %s committed.", id(session))
    except SQLAlchemyError:
        log.exception(">>> get_async_db_session: SQLAlchemyError in session %s, rolling back...", id(session))
        await session.rollback()
        raise
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def create_db_and_tables() -> None:
    # Model modules must be imported so their tables register on Base.metadata.
    import app.core.events.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("Database tables ensured.")


async def drop_db_and_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


__all__ = [
    "Base", "engine", "async_session_factory", "AsyncSession",
    "get_async_db_session",
    "create_db_and_tables", "drop_db_and_tables",
]
