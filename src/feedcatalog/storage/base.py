"""Abstract key-value storage interface using Protocol.

Defines the transactional bucket/key contract the feed list store is built on.
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol


class Bucket(Protocol):
    """A named collection of byte values inside a transaction."""

    async def get(self, key: str) -> bytes | None:
        """Get the value stored under key.

        Returns:
            The raw bytes, or None if nothing is stored yet.
        """
        ...

    async def put(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: If the transaction is read-only or the write fails.
        """
        ...


class Transaction(Protocol):
    """A single read-only or read-write view of the store."""

    writable: bool

    async def bucket(self, name: str) -> Bucket | None:
        """Get a bucket by name.

        Returns:
            The bucket if it exists, None otherwise.
        """
        ...

    async def create_bucket_if_absent(self, name: str) -> Bucket:
        """Create a bucket unless it already exists.

        Raises:
            StorageError: If the transaction is read-only.
        """
        ...


class KeyValueStore(Protocol):
    """Transactional key-value store protocol.

    Implemented by the SQLite and in-memory backends.
    """

    async def initialize(self) -> None:
        """Prepare the physical store (files, tables, etc.)."""
        ...

    async def create_bucket_if_absent(self, name: str) -> None:
        """Create a bucket in its own write transaction."""
        ...

    def view(self) -> AbstractAsyncContextManager[Transaction]:
        """Open a read-only transaction.

        Usage:
            async with store.view() as tx:
                bucket = await tx.bucket("name")
        """
        ...

    def update(self) -> AbstractAsyncContextManager[Transaction]:
        """Open a read-write transaction.

        Commits when the block exits normally, rolls back on any exception.
        """
        ...

    async def close(self) -> None:
        """Release the store."""
        ...
