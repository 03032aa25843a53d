"""
ProfileDesk Backend — Database Engine & Session Management
===========================================================

What:  Async SQLAlchemy engine factory, declarative base, and the FastAPI
       session dependency.
How:   `build_engine()` creates the engine for a Settings object; the engine
       and its session factory live on the AppContext (see context.py), and
       `get_db_session` opens one session per request from that factory,
       committing on success and rolling back on error.

Connection Pooling:
    PostgreSQL (asyncpg) uses the configured pool_size / max_overflow.
    SQLite (aiosqlite, used by the test suite) keeps SQLAlchemy's default
    pool, which does not accept those arguments.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from profiledesk.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, `create_all` at startup
    and Alembic autogenerate.
    """
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create an async engine for `settings.database_url`.

    Pool arguments are only passed to server databases; SQL echo follows
    LOG_LEVEL=DEBUG.
    """
    url = make_url(settings.database_url)
    kwargs = {"echo": settings.log_level == "DEBUG"}

    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: response models read attributes after commit
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the AppContext attached to the app
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns the connection to the pool)
    """
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
