"""Models package."""

from feedcatalog.models.feed import DEFAULT_FEEDS, Feed, FeedList

__all__ = [
    "Feed",
    "FeedList",
    "DEFAULT_FEEDS",
]
