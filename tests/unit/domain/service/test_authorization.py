"""Unit tests for AuthorizationGuard."""

from uuid import uuid4

import pytest

from graffiti.domain.error import ForbiddenError
from graffiti.domain.model.tag import Tag
from graffiti.domain.service import AuthorizationGuard
from graffiti.domain.value import TagId
from tests.conftest import make_draft


@pytest.fixture
def tag() -> Tag:
    return Tag.from_draft(TagId(uuid4()), make_draft(author_id="alice"))


class TestAuthorizationGuard:
    """Tests for delete authorization."""

    def test_author_can_delete(self, tag):
        assert AuthorizationGuard().can_delete(tag, "alice") is True

    def test_other_identity_cannot_delete(self, tag):
        assert AuthorizationGuard().can_delete(tag, "bob") is False

    def test_identity_match_is_exact(self, tag):
        """No case folding or trimming of opaque identities."""
        assert AuthorizationGuard().can_delete(tag, "Alice") is False
        assert AuthorizationGuard().can_delete(tag, "alice ") is False

    def test_ensure_can_delete_raises_for_non_author(self, tag):
        with pytest.raises(ForbiddenError) as exc_info:
            AuthorizationGuard().ensure_can_delete(tag, "bob")

        assert exc_info.value.requester_id == "bob"
        assert exc_info.value.resource_id == str(tag.id)

    def test_ensure_can_delete_passes_for_author(self, tag):
        AuthorizationGuard().ensure_can_delete(tag, "alice")
