"""Storage factory for creating backing store instances.

Provides a factory function to create the key-value store based on configuration.
"""

from feedcatalog.config.settings import Settings
from feedcatalog.storage.base import KeyValueStore
from feedcatalog.storage.memory import MemoryKeyValueStore
from feedcatalog.storage.sqlite import SQLiteKeyValueStore


def create_kv_store(settings: Settings) -> KeyValueStore:
    """Create a key-value store based on configuration.

    Args:
        settings: Application settings.

    Returns:
        KeyValueStore instance (SQLite or in-memory).

    Raises:
        ValueError: If the database type is unsupported.
    """
    db_type = settings.db_type.lower()

    if db_type == "sqlite":
        return SQLiteKeyValueStore(settings.db_path)

    elif db_type == "memory":
        return MemoryKeyValueStore()

    else:
        raise ValueError(f"Unsupported database type: {db_type}. " f"Supported types: sqlite, memory")
