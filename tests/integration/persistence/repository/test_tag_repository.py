"""Integration tests for PostgresTagRepository.

Requires PostgreSQL at DATABASE__URL with migrations applied.
"""

import os
from uuid import uuid4

import pytest

from graffiti.domain.model.tag import Tag
from graffiti.domain.repository import TagRepository
from graffiti.domain.value import TagId, VoteDirection
from tests.conftest import SF_LAT, SF_LNG, make_draft
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

integration_env = create_env_fixture(unmock={"persistence"})


def _tag(lat: float = SF_LAT) -> Tag:
    return Tag.from_draft(
        TagId(uuid4()),
        make_draft(
            lat=lat,
            content={
                "kind": "strokes",
                "strokes": [
                    {"points": [{"x": 0, "y": 0}], "color_hex": "#00ff00", "width": 2}
                ],
            },
        ),
    )


class TestPostgresTagRepository:
    """Tests against a real database."""

    @pytest.mark.asyncio
    async def test_put_and_get_round_trip(self, integration_env):
        repo = await integration_env.get(TagRepository)
        tag = _tag()

        await repo.put(tag)

        found = await repo.get(tag.id)
        assert found.content == tag.content
        assert found.lat == SF_LAT and found.lng == SF_LNG

        await repo.delete(tag.id)

    @pytest.mark.asyncio
    async def test_range_scan_uses_latitude_band(self, integration_env):
        repo = await integration_env.get(TagRepository)
        # Far from any other test data
        inside, outside = _tag(lat=-45.0001), _tag(lat=-45.5)
        await repo.put(inside)
        await repo.put(outside)

        found = await repo.range_scan(-45.001, -45.0)

        assert [t.id for t in found] == [inside.id]

        await repo.delete(inside.id)
        await repo.delete(outside.id)

    @pytest.mark.asyncio
    async def test_increment_is_atomic_and_reports_missing(self, integration_env):
        repo = await integration_env.get(TagRepository)
        tag = _tag()
        await repo.put(tag)

        updated = await repo.increment(tag.id, VoteDirection.UP)

        assert updated.upvotes == 1
        assert await repo.delete(tag.id) is True
        assert await repo.increment(tag.id, VoteDirection.UP) is None
        assert await repo.delete(tag.id) is False
