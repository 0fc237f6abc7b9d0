"""Tests for feed models and the default catalog."""

import pytest
from pydantic import ValidationError

from feedcatalog.models.feed import DEFAULT_FEEDS, Feed, FeedList


def test_feed_parses_wire_names(sample_feed_dict):
    feed = Feed.model_validate(sample_feed_dict)

    assert feed.id == "client-supplied-id"
    assert feed.url == "http://example.com/rss"
    assert feed.image_url == "http://example.com/logo.png"
    assert feed.category == "Examples"


def test_feed_accepts_field_names_and_defaults_missing_fields():
    feed = Feed.model_validate({"url": "http://example.com/rss", "Unknown": 1})

    assert feed.url == "http://example.com/rss"
    assert feed.id == ""
    assert feed.title == ""
    assert feed.category == ""


def test_feed_dumps_wire_names():
    feed = Feed(id="abc", url="http://example.com/rss")

    assert feed.model_dump(by_alias=True) == {
        "ID": "abc",
        "Title": "",
        "Description": "",
        "URL": "http://example.com/rss",
        "ImageURL": "",
        "Category": "",
    }


def test_feed_is_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_FEEDS[0].url = "http://example.com/other"


def test_default_catalog():
    assert len(DEFAULT_FEEDS) == 4
    assert len({feed.id for feed in DEFAULT_FEEDS}) == 4
    assert len({feed.url for feed in DEFAULT_FEEDS}) == 4
    assert DEFAULT_FEEDS[0].title == "BBC News - UK"
    assert DEFAULT_FEEDS[2].category == "Sky News"


def test_feed_list_rejects_non_list_json():
    with pytest.raises(ValidationError):
        FeedList.validate_json(b'{"ID": "abc"}')
