"""Feed list store.

Persists user-added feeds as one JSON array in the key-value store and
merges them with the immutable default catalog.
"""

import asyncio
import uuid
from collections.abc import Callable, Sequence

import structlog
from pydantic import ValidationError

from feedcatalog.exceptions import (
    CorruptedStoreError,
    FeedNotFoundError,
    InitializationError,
    StorageError,
    UnconfiguredBucketError,
)
from feedcatalog.models.feed import DEFAULT_FEEDS, Feed, FeedList
from feedcatalog.storage.base import KeyValueStore

logger = structlog.get_logger()

FEED_LIST_BUCKET = "feedlist"
ALL_FEEDS_KEY = "all"


def _new_feed_id() -> str:
    return str(uuid.uuid4())


class FeedListStore:
    """Catalog of available feeds: default catalog plus user-added feeds.

    Every add rewrites the whole stored list, which is fine for a catalog of
    this size but makes each write O(n) in the number of stored feeds.

    Unless serialize_adds is set, add() reads and writes in two separate
    transactions with no lock held in between. Each write replaces the list
    with its own read plus one feed, so concurrent adds overwrite each other:
    only the last writer's feed is kept, whatever the URLs, and the other
    callers get back ids that never resolve. Single-writer use only.
    With serialize_adds=True all adds on this instance run one at a time.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        default_feeds: Sequence[Feed] = DEFAULT_FEEDS,
        serialize_adds: bool = False,
        id_factory: Callable[[], str] = _new_feed_id,
    ):
        """Initialize the feed list store.

        Args:
            kv: Backing key-value store.
            default_feeds: Read-only catalog listed before the stored feeds.
            serialize_adds: Guard add() with a store-wide lock.
            id_factory: Generates identifiers for newly added feeds.
        """
        self._kv = kv
        self._default_feeds = tuple(default_feeds)
        self._id_factory = id_factory
        self._add_lock = asyncio.Lock() if serialize_adds else None

    @property
    def default_feeds(self) -> tuple[Feed, ...]:
        return self._default_feeds

    async def initialize(self) -> None:
        """Create the feed list bucket if it doesn't exist.

        Raises:
            InitializationError: If the bucket can't be created. The store
                must not be used afterwards.
        """
        try:
            await self._kv.create_bucket_if_absent(FEED_LIST_BUCKET)
        except StorageError as e:
            logger.error("Error creating bucket", bucket=FEED_LIST_BUCKET, error=str(e))
            raise InitializationError() from e

    async def list_stored(self) -> list[Feed]:
        """Get the user-added feeds in insertion order.

        Raises:
            UnconfiguredBucketError: If the bucket doesn't exist.
            CorruptedStoreError: If the stored value can't be deserialized.
        """
        async with self._kv.view() as tx:
            bucket = await tx.bucket(FEED_LIST_BUCKET)
            if bucket is None:
                logger.error("Bucket is unconfigured", bucket=FEED_LIST_BUCKET)
                raise UnconfiguredBucketError(FEED_LIST_BUCKET)
            raw_feed_list = await bucket.get(ALL_FEEDS_KEY)

        if not raw_feed_list:
            return []

        try:
            return FeedList.validate_json(raw_feed_list)
        except ValidationError as e:
            logger.error(
                "Can't deserialize stored feed list",
                bucket=FEED_LIST_BUCKET,
                raw=raw_feed_list[:200],
                error_count=e.error_count(),
            )
            raise CorruptedStoreError() from e

    async def list_all(self) -> list[Feed]:
        """Get all feeds: the default catalog first, then the stored feeds."""
        stored_feeds = await self.list_stored()
        return [*self._default_feeds, *stored_feeds]

    async def get_by_id(self, feed_id: str) -> Feed:
        """Get one feed by its identifier.

        Raises:
            FeedNotFoundError: If no feed has this identifier.
        """
        for feed in await self.list_all():
            if feed.id == feed_id:
                return feed

        raise FeedNotFoundError(feed_id)

    async def add(self, feed: Feed) -> str:
        """Register a feed, idempotently by URL.

        Any identifier on the given feed is replaced; the store alone
        assigns identifiers.

        Returns:
            The new feed's identifier, or the existing feed's identifier if
            a feed with the same URL is already registered.
        """
        if self._add_lock is None:
            return await self._add(feed)

        async with self._add_lock:
            return await self._add(feed)

    async def _add(self, feed: Feed) -> str:
        feed = feed.model_copy(update={"id": self._id_factory()})
        log = logger.bind(url=feed.url)

        stored_feeds = await self.list_stored()

        for existing_feed in (*self._default_feeds, *stored_feeds):
            if existing_feed.url == feed.url:
                log.debug("Feed already registered", feed_id=existing_feed.id)
                return existing_feed.id

        try:
            raw_feed_list = FeedList.dump_json([*stored_feeds, feed], by_alias=True)
        except ValueError as e:
            log.error("Failed to serialize feed list", error=str(e))
            raise StorageError(f"Failed to serialize feed list: {e}") from e

        async with self._kv.update() as tx:
            bucket = await tx.bucket(FEED_LIST_BUCKET)
            if bucket is None:
                log.error("Bucket is unconfigured", bucket=FEED_LIST_BUCKET)
                raise UnconfiguredBucketError(FEED_LIST_BUCKET)
            await bucket.put(ALL_FEEDS_KEY, raw_feed_list)

        log.info("Feed added", feed_id=feed.id)
        return feed.id
