"""Storage package."""

from feedcatalog.storage.base import Bucket, KeyValueStore, Transaction
from feedcatalog.storage.factory import create_kv_store
from feedcatalog.storage.feed_list import FeedListStore
from feedcatalog.storage.memory import MemoryKeyValueStore
from feedcatalog.storage.sqlite import SQLiteKeyValueStore

__all__ = [
    "Bucket",
    "Transaction",
    "KeyValueStore",
    "SQLiteKeyValueStore",
    "MemoryKeyValueStore",
    "FeedListStore",
    "create_kv_store",
]
