"""Test configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from feedcatalog.config.settings import Settings
from feedcatalog.main import create_app
from feedcatalog.storage.feed_list import FeedListStore
from feedcatalog.storage.memory import MemoryKeyValueStore
from feedcatalog.storage.sqlite import SQLiteKeyValueStore


@pytest.fixture
def temp_db_path():
    """Create a temporary database path for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def sample_feed_dict():
    """Sample feed payload as sent over the wire."""
    return {
        "ID": "client-supplied-id",
        "Title": "Example Feed",
        "Description": "An example syndication feed",
        "URL": "http://example.com/rss",
        "ImageURL": "http://example.com/logo.png",
        "Category": "Examples",
    }


@pytest.fixture(params=["sqlite", "memory"])
async def kv_store(request, temp_db_path):
    """Initialized backing store, once per backend."""
    if request.param == "sqlite":
        kv = SQLiteKeyValueStore(temp_db_path)
    else:
        kv = MemoryKeyValueStore()
    await kv.initialize()
    yield kv
    await kv.close()


@pytest.fixture
async def feed_store(kv_store):
    """Ready feed list store with the built-in default catalog."""
    store = FeedListStore(kv_store)
    await store.initialize()
    return store


@pytest.fixture
def app_settings(temp_db_path):
    return Settings(db_type="sqlite", db_path=temp_db_path, _env_file=None)


@pytest.fixture
def client(app_settings):
    """API test client with lifespan (storage initialization) applied."""
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client
