"""SQLite key-value storage implementation.

Provides async SQLite storage of named buckets holding byte values.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from feedcatalog.exceptions import StorageError


class SQLiteBucket:
    """Bucket bound to an open SQLite transaction."""

    def __init__(self, tx: "SQLiteTransaction", name: str):
        self._tx = tx
        self.name = name

    async def get(self, key: str) -> bytes | None:
        async with self._tx.db.execute(
            "SELECT value FROM entries WHERE bucket = ? AND key = ?",
            (self.name, key),
        ) as cursor:
            row = await cursor.fetchone()
            return bytes(row[0]) if row else None

    async def put(self, key: str, value: bytes) -> None:
        self._tx.ensure_writable()
        await self._tx.db.execute(
            """
            INSERT INTO entries (bucket, key, value) VALUES (?, ?, ?)
            ON CONFLICT (bucket, key) DO UPDATE SET value = excluded.value
            """,
            (self.name, key, value),
        )


class SQLiteTransaction:
    """One SQLite transaction, read-only or read-write."""

    def __init__(self, db: aiosqlite.Connection, writable: bool):
        self.db = db
        self.writable = writable

    def ensure_writable(self) -> None:
        if not self.writable:
            raise StorageError("Transaction is read-only")

    async def bucket(self, name: str) -> SQLiteBucket | None:
        """Get a bucket by name, or None if it (or the schema) doesn't exist."""
        try:
            async with self.db.execute(
                "SELECT 1 FROM buckets WHERE name = ?", (name,)
            ) as cursor:
                if await cursor.fetchone() is None:
                    return None
        except aiosqlite.OperationalError as e:
            # Database file never initialized
            if "no such table" not in str(e):
                raise
            return None
        return SQLiteBucket(self, name)

    async def create_bucket_if_absent(self, name: str) -> SQLiteBucket:
        self.ensure_writable()
        await self.db.execute("INSERT OR IGNORE INTO buckets (name) VALUES (?)", (name,))
        return SQLiteBucket(self, name)


class SQLiteKeyValueStore:
    """SQLite-based key-value store.

    Buckets and their entries live in two tables of one database file.
    """

    def __init__(self, db_path: Path):
        """Initialize SQLite storage.

        Args:
            db_path: Path to the SQLite database file.
        """
        self._db_path = db_path
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize database schema.

        Creates tables if they don't exist. Should be called once on startup.
        """
        if self._initialized:
            return

        schema_path = Path(__file__).parent / "migrations" / "init_schema.sql"
        schema_sql = schema_path.read_text()

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiosqlite.connect(self._db_path) as db:
                await db.executescript(schema_sql)
                await db.commit()
        except (OSError, aiosqlite.Error) as e:
            raise StorageError(f"Failed to open {self._db_path}: {e}") from e

        self._initialized = True

    async def create_bucket_if_absent(self, name: str) -> None:
        async with self.update() as tx:
            await tx.create_bucket_if_absent(name)

    @asynccontextmanager
    async def view(self) -> AsyncIterator[SQLiteTransaction]:
        """Open a deferred transaction that is always rolled back."""
        async with self._transaction("BEGIN", writable=False) as tx:
            yield tx

    @asynccontextmanager
    async def update(self) -> AsyncIterator[SQLiteTransaction]:
        """Open an immediate (write-locked) transaction.

        BEGIN IMMEDIATE takes the database write lock before the first read.
        """
        async with self._transaction("BEGIN IMMEDIATE", writable=True) as tx:
            yield tx

    @asynccontextmanager
    async def _transaction(self, begin: str, writable: bool) -> AsyncIterator[SQLiteTransaction]:
        try:
            # isolation_level=None leaves BEGIN/COMMIT/ROLLBACK to us
            async with aiosqlite.connect(self._db_path, isolation_level=None) as db:
                await db.execute(begin)
                try:
                    yield SQLiteTransaction(db, writable)
                except BaseException:
                    await db.execute("ROLLBACK")
                    raise
                await db.execute("COMMIT" if writable else "ROLLBACK")
        except aiosqlite.Error as e:
            raise StorageError(str(e)) from e

    async def close(self) -> None:
        """Close storage (no-op for SQLite as we use connection per operation)."""
        pass
