"""Test harness for unit and integration tests.

Integration tests assume PostgreSQL is reachable at DATABASE__URL with the
migrations applied.
"""

import pytest_asyncio

from graffiti.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    The fixture yields a request-scoped container. APP-scoped services (tag
    store, subscription hub, rate limiter) are fresh per test and the hub is
    shut down when the test ends.

    Args:
        unmock: Components to use real implementations for

    Usage:
        unit_env = create_env_fixture()
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_tag(unit_env):
            use_case = await unit_env.get(CreateTagUseCase)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _test_environment
