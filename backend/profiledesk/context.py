"""
ProfileDesk Backend — Application Context
==========================================

What:  The explicitly constructed bundle of process-wide resources:
       settings, database engine, session factory and token issuer.
How:   `create_app()` builds one AppContext and stores it on `app.state`.
       Request dependencies read it from `request.app.state.context`.
       The lifespan calls `startup()` and `dispose()`.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from profiledesk.config import Settings
from profiledesk.database import Base, build_engine, build_session_factory
from profiledesk.security.tokens import TokenIssuer

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    token_issuer: TokenIssuer

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        engine = build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            token_issuer=TokenIssuer(
                secret=settings.jwt_secret,
                lifetime=settings.jwt_lifetime,
                algorithm=settings.jwt_algorithm,
            ),
        )

    async def create_schema(self) -> None:
        """Create any missing tables for the registered models."""
        # Models register themselves on Base.metadata when imported
        from profiledesk.models import account, member, profile  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))

    async def startup(self) -> None:
        if self.settings.db_create_all:
            await self.create_schema()

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.info("Database engine disposed")
