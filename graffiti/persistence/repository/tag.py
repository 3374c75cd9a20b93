"""PostgreSQL implementation of Tag repository."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

import logfire
from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from graffiti.domain.error import StoreUnavailableError
from graffiti.domain.model.tag import Tag
from graffiti.domain.repository.tag import TagRepository
from graffiti.domain.value import TagId, VoteDirection
from graffiti.persistence.mappers import row_to_tag, tag_to_dict
from graffiti.persistence.tables import tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository.

    Live subscriptions outlive any single request, so the repository owns a
    session factory and runs every operation in its own short transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for async database sessions
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Open a session, commit on success and map transient failures."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except (OperationalError, PoolTimeoutError) as e:
            logfire.warn("Tag store unavailable", error=str(e))
            raise StoreUnavailableError(str(e)) from e
        except DBAPIError as e:
            if e.connection_invalidated:
                logfire.warn("Tag store connection lost", error=str(e))
                raise StoreUnavailableError(str(e)) from e
            raise

    async def put(self, tag: Tag) -> Tag:
        """Insert or replace a tag."""
        values = tag_to_dict(tag)
        stmt = insert(tags_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[tags_table.c.id],
            set_={k: v for k, v in values.items() if k != "id"},
        )
        async with self._session() as session:
            await session.execute(stmt)
        return tag

    async def get(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id)
        async with self._session() as session:
            result = await session.execute(stmt)
            row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def delete(self, tag_id: TagId) -> bool:
        """Delete a tag."""
        stmt = (
            delete(tags_table)
            .where(tags_table.c.id == tag_id)
            .returning(tags_table.c.id)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return result.fetchone() is not None

    async def range_scan(self, lat_min: float, lat_max: float) -> list[Tag]:
        """Find tags inside a latitude band (uses idx_tags_lat)."""
        stmt = select(tags_table).where(
            tags_table.c.lat >= lat_min,
            tags_table.c.lat <= lat_max,
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            rows = result.fetchall()
        return [row_to_tag(row._asdict()) for row in rows]

    async def increment(self, tag_id: TagId, direction: VoteDirection) -> Optional[Tag]:
        """Atomically increment a counter.

        Uses SQL-level increment to avoid lost updates.
        """
        column = tags_table.c[direction.counter_field]
        stmt = (
            update(tags_table)
            .where(tags_table.c.id == tag_id)
            .values({column: column + 1})
            .returning(*tags_table.c)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None
