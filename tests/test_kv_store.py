"""Tests for the key-value backing stores (SQLite and in-memory)."""

import pytest

from feedcatalog.config.settings import Settings
from feedcatalog.exceptions import StorageError
from feedcatalog.storage.factory import create_kv_store
from feedcatalog.storage.memory import MemoryKeyValueStore
from feedcatalog.storage.sqlite import SQLiteKeyValueStore


@pytest.mark.asyncio
async def test_missing_bucket_is_none(kv_store):
    async with kv_store.view() as tx:
        assert await tx.bucket("missing") is None


@pytest.mark.asyncio
async def test_create_bucket_is_idempotent(kv_store):
    await kv_store.create_bucket_if_absent("feeds")
    async with kv_store.update() as tx:
        bucket = await tx.bucket("feeds")
        await bucket.put("key", b"value")

    await kv_store.create_bucket_if_absent("feeds")

    async with kv_store.view() as tx:
        bucket = await tx.bucket("feeds")
        assert await bucket.get("key") == b"value"


@pytest.mark.asyncio
async def test_get_absent_key_returns_none(kv_store):
    await kv_store.create_bucket_if_absent("feeds")

    async with kv_store.view() as tx:
        bucket = await tx.bucket("feeds")
        assert await bucket.get("nothing") is None


@pytest.mark.asyncio
async def test_put_overwrites_value(kv_store):
    await kv_store.create_bucket_if_absent("feeds")

    async with kv_store.update() as tx:
        await (await tx.bucket("feeds")).put("key", b"first")
    async with kv_store.update() as tx:
        await (await tx.bucket("feeds")).put("key", b"second")

    async with kv_store.view() as tx:
        assert await (await tx.bucket("feeds")).get("key") == b"second"


@pytest.mark.asyncio
async def test_read_only_transaction_rejects_writes(kv_store):
    await kv_store.create_bucket_if_absent("feeds")

    async with kv_store.view() as tx:
        bucket = await tx.bucket("feeds")
        with pytest.raises(StorageError):
            await bucket.put("key", b"value")
        with pytest.raises(StorageError):
            await tx.create_bucket_if_absent("other")


@pytest.mark.asyncio
async def test_failed_update_is_rolled_back(kv_store):
    await kv_store.create_bucket_if_absent("feeds")

    with pytest.raises(RuntimeError):
        async with kv_store.update() as tx:
            await (await tx.bucket("feeds")).put("key", b"value")
            await tx.create_bucket_if_absent("other")
            raise RuntimeError("boom")

    async with kv_store.view() as tx:
        assert await (await tx.bucket("feeds")).get("key") is None
        assert await tx.bucket("other") is None


@pytest.mark.asyncio
async def test_sqlite_store_persists_across_instances(temp_db_path):
    first = SQLiteKeyValueStore(temp_db_path)
    await first.initialize()
    await first.create_bucket_if_absent("feeds")
    async with first.update() as tx:
        await (await tx.bucket("feeds")).put("key", b"value")

    second = SQLiteKeyValueStore(temp_db_path)
    await second.initialize()
    async with second.view() as tx:
        assert await (await tx.bucket("feeds")).get("key") == b"value"


@pytest.mark.asyncio
async def test_sqlite_initialize_fails_on_unusable_path(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")

    store = SQLiteKeyValueStore(blocker / "test.db")

    with pytest.raises(StorageError):
        await store.initialize()


def test_factory_creates_configured_store(temp_db_path):
    sqlite_settings = Settings(db_type="sqlite", db_path=temp_db_path, _env_file=None)
    memory_settings = Settings(db_type="MEMORY", _env_file=None)

    assert isinstance(create_kv_store(sqlite_settings), SQLiteKeyValueStore)
    assert isinstance(create_kv_store(memory_settings), MemoryKeyValueStore)


def test_factory_rejects_unknown_type():
    with pytest.raises(ValueError, match="Unsupported database type"):
        create_kv_store(Settings(db_type="bolt", _env_file=None))
