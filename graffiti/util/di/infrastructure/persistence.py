"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from graffiti.config import Settings
from graffiti.domain.repository import TagRepository
from graffiti.persistence.database import create_engine, create_session_factory
from graffiti.persistence.repository import PostgresTagRepository
from graffiti.util.di.base import ProviderBase
from graffiti.util.error import ConfigurationError
from graffiti.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed with the container."""
        if not settings.database_url.startswith("postgresql+asyncpg://"):
            raise ConfigurationError(
                "DATABASE__URL must use the postgresql+asyncpg driver"
            )
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        try:
            yield engine
        finally:
            await engine.dispose()
            logfire.info("Database engine disposed")

    @provide
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide
    def get_tag_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> TagRepository:
        """Provide Tag repository.

        APP-scoped: live subscriptions read from it long after the request
        that opened them has finished.
        """
        return PostgresTagRepository(session_factory)
