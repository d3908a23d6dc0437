from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from linkstash.core.errors import InvalidUrlError
from linkstash.models.link.record import MetadataResult, SourceTag
from linkstash.services.links.factory import create_link_record


def _parse(ts: str) -> datetime:
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))


class TestCreateLinkRecord:
    def test_uses_all_metadata_fields(self):
        record = create_link_record(
            "https://example.com/article",
            MetadataResult(
                title="Title",
                description="Desc",
                image="https://example.com/img.png",
                author="Ada",
            ),
        )
        assert record.url == "https://example.com/article"
        assert record.title == "Title"
        assert record.description == "Desc"
        assert record.image == "https://example.com/img.png"
        assert record.author == "Ada"
        assert record.source is SourceTag.WEB

    def test_accepts_plain_mapping(self):
        record = create_link_record("https://example.com/", {"title": "From dict"})
        assert record.title == "From dict"
        assert record.description == ""

    def test_generates_unique_uuid(self):
        a = create_link_record("https://example.com/a")
        b = create_link_record("https://example.com/a")
        assert a.id != b.id
        assert uuid.UUID(a.id).version == 4

    def test_timestamp_is_recent_utc_iso(self):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        record = create_link_record("https://example.com/")
        after = datetime.now(timezone.utc) + timedelta(seconds=1)

        assert record.added.endswith("Z")
        assert before <= _parse(record.added) <= after

    def test_detects_source_from_url(self):
        assert create_link_record("https://x.com/u/status/1").source is SourceTag.TWITTER
        assert create_link_record("https://youtu.be/abc").source is SourceTag.YOUTUBE
        assert create_link_record("https://github.com/o/r").source is SourceTag.GITHUB

    def test_title_falls_back_to_url(self):
        assert create_link_record("https://example.com/x").title == "https://example.com/x"
        assert create_link_record("https://example.com/x", {"title": "   "}).title == (
            "https://example.com/x"
        )

    def test_none_values_become_empty_strings(self):
        record = create_link_record(
            "https://example.com/",
            {"title": None, "description": None, "image": None, "author": None},
        )
        assert record.title == "https://example.com/"
        assert (record.description, record.image, record.author) == ("", "", "")

    def test_trims_whitespace_from_all_fields(self):
        record = create_link_record(
            "  https://example.com/  ",
            {"title": "  T  ", "description": "\tD\n", "image": " I ", "author": " A "},
        )
        assert record.url == "https://example.com/"
        assert (record.title, record.description, record.image, record.author) == (
            "T",
            "D",
            "I",
            "A",
        )

    @pytest.mark.parametrize("url", ["", None, "not-a-url"])
    def test_rejects_invalid_url(self, url):
        with pytest.raises(InvalidUrlError):
            create_link_record(url)

    def test_record_is_immutable(self):
        record = create_link_record("https://example.com/")
        with pytest.raises(ValidationError):
            record.title = "changed"
