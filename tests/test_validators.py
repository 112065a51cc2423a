# ============================================================
# Unit tests for CommentValidator and ContextValidator
# ============================================================

import pytest

from campaign_core.models import Comment, VideoContext
from campaign_core.validators import CommentValidator, ContextValidator


class TestCommentValidator:

    @pytest.mark.parametrize("raw, message", [
        ("just a string", "Unsupported comment type"),
        ({"id": "1"}, "no text"),
        ({"id": "1", "text": 42}, "not a string"),
        ({"id": "1", "text": "   "}, "empty"),
    ])
    def test_invalid_records(self, raw, message):
        result = CommentValidator.validate(raw)

        assert not result
        assert message in result.error_message

    def test_valid_record(self):
        assert CommentValidator.validate({"text": "Halo"})
        assert CommentValidator.validate(Comment(id="1", text="Halo"))

    def test_parse_fills_defaults(self):
        comment = CommentValidator.parse({"text": "Halo", "author": ""}, 7)

        assert comment == Comment(id="comment_7", text="Halo", author="Unknown")

    def test_parse_stringifies_ids(self):
        assert CommentValidator.parse({"id": 12, "text": "Halo"}, 0).id == "12"

    def test_parse_keeps_comment_objects(self):
        comment = Comment(id="x", text="Halo", author="someone")
        assert CommentValidator.parse(comment, 3) is comment

    def test_parse_batch_keeps_positions(self):
        parsed = CommentValidator.parse_batch([
            {"id": "a", "text": "satu"},
            None,
            {"id": "c", "text": ""},
            {"id": "d", "text": "dua"},
        ])

        assert [(index, comment.id) for index, comment in parsed] == [(0, "a"), (3, "d")]


class TestContextValidator:

    def test_no_context(self):
        assert ContextValidator.build_context() is None

    def test_video_overrides_channel(self):
        context = ContextValidator.build_context(
            channel_context={"name": "Kanal Otomotif", "category": "Autos & Vehicles", "tags": ["mobil"]},
            video_context={"title": "Review Honda Jazz", "tags": ["honda", "mobil"]},
        )

        assert context == VideoContext(
            title="Review Honda Jazz",
            description="",
            category="Autos & Vehicles",
            tags=("mobil", "honda"),
        )

    def test_channel_name_is_title(self):
        context = ContextValidator.build_context(channel_context={"name": "Kanal Otomotif"})
        assert context.title == "Kanal Otomotif"

    def test_malformed_fields_are_ignored(self):
        context = ContextValidator.build_context(
            video_context={"title": 123, "description": "  Ulasan  ", "tags": "honda", "category": None},
        )

        assert context.title == ""
        assert context.description == "Ulasan"
        assert context.tags == ()
        assert context.category == ""

    def test_malformed_context_still_counts_as_supplied(self):
        context = ContextValidator.build_context(video_context=["not", "a", "mapping"])

        assert context is not None
        assert context.is_empty

    def test_non_string_tags_are_dropped(self):
        parsed = ContextValidator.parse({"tags": ["honda", 3, "", "jazz"]})
        assert parsed == {"tags": ["honda", "jazz"]}
