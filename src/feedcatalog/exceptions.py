"""Custom exceptions for the feed catalog.

Provides a structured exception hierarchy for storage and lookup errors.
"""


class FeedCatalogError(Exception):
    """Base exception class for all feed catalog errors."""

    pass


class StorageError(FeedCatalogError):
    """Raised when backing store or serialization operations fail."""

    pass


class InitializationError(StorageError):
    """Raised when the feed list bucket cannot be created on startup.

    The store must not be used after this error.
    """

    def __init__(self, message: str = "Error Initializing DB"):
        super().__init__(message)


class UnconfiguredBucketError(StorageError):
    """Raised when the bucket being read or written does not exist.

    Attributes:
        bucket: Name of the missing bucket.
    """

    def __init__(self, bucket: str):
        self.bucket = bucket
        super().__init__(f"Error Unconfigured Bucket: {bucket}")


class CorruptedStoreError(StorageError):
    """Raised when the persisted feed list cannot be deserialized."""

    def __init__(self, message: str = "Corrupted stored feed list"):
        super().__init__(message)


class FeedNotFoundError(FeedCatalogError):
    """Raised when no feed matches the requested identifier.

    Attributes:
        feed_id: The identifier that was looked up.
    """

    def __init__(self, feed_id: str):
        self.feed_id = feed_id
        super().__init__("Feed does not exist")
