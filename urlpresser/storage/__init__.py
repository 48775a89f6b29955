"""
Snapshot storage module with abstraction layer.

This module provides:
- SnapshotStorage interface: Abstract base class for snapshot backends
- JSONFileStorage: JSON file implementation (default)
- NullStorage: In-memory mode, persistence disabled
- URLPair: The persisted record
"""

from urlpresser.storage.interface import SnapshotStorage
from urlpresser.storage.json_file import JSONFileStorage, NullStorage, get_snapshot_storage
from urlpresser.storage.models import URLPair

__all__ = [
    "SnapshotStorage",
    "JSONFileStorage",
    "NullStorage",
    "URLPair",
    "get_snapshot_storage",
]
