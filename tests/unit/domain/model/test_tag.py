"""Unit tests for Tag and TagDraft."""

from uuid import uuid4

import pytest

from graffiti.domain.error import ValidationError
from graffiti.domain.model.tag import StrokesContent, Tag, TagDraft, TextContent
from graffiti.domain.value import ContentKind, TagId
from tests.conftest import SF_LAT, SF_LNG, make_draft

STROKE = {
    "points": [{"x": 0.0, "y": 0.0}, {"x": 1.0, "y": 2.0}],
    "color_hex": "#ff0000",
    "width": 3.5,
}


class TestTagDraft:
    """Tests for input validation."""

    def test_text_draft(self):
        draft = make_draft(body="  hello world  ")

        assert isinstance(draft.content, TextContent)
        assert draft.content.body == "hello world"

    def test_strokes_draft(self):
        draft = make_draft(content={"kind": "strokes", "strokes": [STROKE]})

        assert isinstance(draft.content, StrokesContent)
        assert draft.content.strokes[0].color_hex.root == "#FF0000"

    def test_external_draft(self):
        draft = make_draft(content={"kind": "external", "asset_ref": "s3://b/k.png"})

        assert draft.content.asset_ref == "s3://b/k.png"

    def test_content_model_is_accepted(self):
        draft = TagDraft.create(
            author_id="alice", lat=SF_LAT, lng=SF_LNG, content=TextContent(body="hi")
        )

        assert draft.content.body == "hi"

    @pytest.mark.parametrize(
        "content",
        [
            {"kind": "text", "body": "   "},
            {"kind": "text", "body": "x" * 281},
            {"kind": "strokes", "strokes": []},
            {"kind": "strokes", "strokes": [{**STROKE, "points": []}]},
            {"kind": "strokes", "strokes": [{**STROKE, "color_hex": "red"}]},
            {"kind": "strokes", "strokes": [{**STROKE, "width": 0}]},
            {"kind": "external", "asset_ref": ""},
            {"kind": "video", "url": "x"},
            {"body": "missing kind"},
        ],
    )
    def test_malformed_content_is_rejected(self, content):
        with pytest.raises(ValidationError):
            make_draft(content=content)

    @pytest.mark.parametrize(
        "lat,lng",
        [(90.1, 0.0), (-90.1, 0.0), (0.0, 180.1), (0.0, -180.1), (float("nan"), 0.0)],
    )
    def test_out_of_range_coordinates_are_rejected(self, lat, lng):
        with pytest.raises(ValidationError):
            make_draft(lat=lat, lng=lng)

    def test_blank_author_is_rejected(self):
        with pytest.raises(ValidationError):
            make_draft(author_id=" ")

    def test_error_message_names_the_field(self):
        with pytest.raises(ValidationError, match="lat"):
            make_draft(lat=100.0)


class TestTag:
    """Tests for the stored entity."""

    def test_from_draft_zeroes_counters(self):
        draft = make_draft(author_id="alice")
        tag_id = TagId(uuid4())

        tag = Tag.from_draft(tag_id, draft)

        assert tag.id == tag_id
        assert tag.author_id == "alice"
        assert (tag.upvotes, tag.downvotes) == (0, 0)
        assert tag.created_at.tzinfo is not None

    def test_kind_and_location(self):
        tag = Tag.from_draft(TagId(uuid4()), make_draft())

        assert tag.kind is ContentKind.TEXT
        assert tag.location.lat == SF_LAT
        assert tag.location.lng == SF_LNG

    def test_tag_is_immutable(self):
        tag = Tag.from_draft(TagId(uuid4()), make_draft())

        with pytest.raises(Exception):
            tag.upvotes = 5

    def test_round_trips_through_json(self):
        tag = Tag.from_draft(
            TagId(uuid4()), make_draft(content={"kind": "strokes", "strokes": [STROKE]})
        )

        assert Tag.model_validate(tag.model_dump(mode="json")) == tag
