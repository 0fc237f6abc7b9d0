"""In-memory key-value storage implementation.

Keeps buckets in process memory with the same transaction semantics as the
SQLite backend. Data does not survive a restart.
"""

import asyncio
import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from feedcatalog.exceptions import StorageError


class MemoryBucket:
    """Bucket backed by a plain dict owned by one transaction."""

    def __init__(self, tx: "MemoryTransaction", entries: dict[str, bytes]):
        self._tx = tx
        self._entries = entries

    async def get(self, key: str) -> bytes | None:
        return self._entries.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self._tx.ensure_writable()
        self._entries[key] = bytes(value)


class MemoryTransaction:
    """Transaction over a snapshot of the store's buckets."""

    def __init__(self, buckets: dict[str, dict[str, bytes]], writable: bool):
        self.buckets = buckets
        self.writable = writable

    def ensure_writable(self) -> None:
        if not self.writable:
            raise StorageError("Transaction is read-only")

    async def bucket(self, name: str) -> MemoryBucket | None:
        entries = self.buckets.get(name)
        if entries is None:
            return None
        return MemoryBucket(self, entries)

    async def create_bucket_if_absent(self, name: str) -> MemoryBucket:
        self.ensure_writable()
        return MemoryBucket(self, self.buckets.setdefault(name, {}))


class MemoryKeyValueStore:
    """Process-local key-value store.

    Writers are serialized with a lock and work on a copy that replaces the
    live state only when the transaction commits.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, dict[str, bytes]] = {}
        self._write_lock = asyncio.Lock()

    async def initialize(self) -> None:
        pass

    async def create_bucket_if_absent(self, name: str) -> None:
        async with self.update() as tx:
            await tx.create_bucket_if_absent(name)

    @asynccontextmanager
    async def view(self) -> AsyncIterator[MemoryTransaction]:
        yield MemoryTransaction(copy.deepcopy(self._buckets), writable=False)

    @asynccontextmanager
    async def update(self) -> AsyncIterator[MemoryTransaction]:
        async with self._write_lock:
            tx = MemoryTransaction(copy.deepcopy(self._buckets), writable=True)
            yield tx
            self._buckets = tx.buckets

    async def close(self) -> None:
        self._buckets = {}
