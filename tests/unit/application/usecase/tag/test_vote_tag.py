"""Unit tests for VoteTagUseCase."""

import asyncio
from uuid import uuid4

import pytest

from graffiti.application.usecase.tag import VoteTagRequest, VoteTagUseCase
from graffiti.domain.error import NotFoundError, ValidationError
from graffiti.domain.service import TagStore
from graffiti.domain.value import VoteDirection
from tests.conftest import make_draft
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestVoteTagUseCase:
    """Tests for VoteTagUseCase."""

    @pytest.mark.asyncio
    async def test_upvote_returns_new_count(self, unit_env):
        store = await unit_env.get(TagStore)
        use_case = await unit_env.get(VoteTagUseCase)
        tag_id = await store.insert(make_draft())

        response = await use_case.execute(
            VoteTagRequest(tag_id=str(tag_id), direction=VoteDirection.UP)
        )

        assert response.count == 1
        assert response.direction == VoteDirection.UP
        assert response.tag_id == str(tag_id)

    @pytest.mark.asyncio
    async def test_concurrent_votes_are_all_counted(self, unit_env):
        store = await unit_env.get(TagStore)
        use_case = await unit_env.get(VoteTagUseCase)
        tag_id = await store.insert(make_draft())

        await asyncio.gather(
            *(
                use_case.execute(
                    VoteTagRequest(tag_id=str(tag_id), direction=VoteDirection.DOWN)
                )
                for _ in range(25)
            )
        )

        assert (await store.get(tag_id)).downvotes == 25

    @pytest.mark.asyncio
    async def test_unknown_tag_raises_not_found(self, unit_env):
        use_case = await unit_env.get(VoteTagUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                VoteTagRequest(tag_id=str(uuid4()), direction=VoteDirection.UP)
            )

    @pytest.mark.asyncio
    async def test_malformed_id_raises_validation_error(self, unit_env):
        use_case = await unit_env.get(VoteTagUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                VoteTagRequest(tag_id="not-a-uuid", direction=VoteDirection.UP)
            )
