"""
Custom Exceptions

This module defines the exceptions raised by the store, the snapshot
adapters and the services. The HTTP layer maps them to status codes in
urlpresser.main.

Hierarchy:
- URLShortenerException
  - InvalidRequestError (400)
    - ShortCodeNotFoundError (400)
  - StorageError
    - SnapshotCorruptedError (fatal at startup)
    - PersistenceError (500)
"""


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class InvalidRequestError(URLShortenerException):
    """Raised when a client request cannot be served."""

    def __init__(self, reason: str = "Invalid request"):
        self.reason = reason
        super().__init__(reason)


class ShortCodeNotFoundError(InvalidRequestError):
    """Raised when a short code has never been issued by the store."""

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")


class StorageError(URLShortenerException):
    """Raised when the snapshot file cannot be read or written."""

    def __init__(self, message: str, path: str = None, original_error: Exception = None):
        self.path = path
        self.original_error = original_error
        super().__init__(f"Storage error: {message}")


class SnapshotCorruptedError(StorageError):
    """Raised when the persisted snapshot cannot be parsed."""
    pass


class PersistenceError(StorageError):
    """Raised when writing the snapshot fails after a new mapping was created."""
    pass
