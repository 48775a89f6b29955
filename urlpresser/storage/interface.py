"""
Snapshot Storage Interface

This module defines the abstraction the URL store uses to load its state at
startup and to write it back after every new mapping. The store never knows
whether it is backed by a file or running purely in memory.

To add a new backend:
1. Create a class inheriting from SnapshotStorage
2. Implement load() and save()
3. Return it from get_snapshot_storage() in urlpresser.storage.json_file
"""

from abc import ABC, abstractmethod

from urlpresser.storage.models import URLPair


class SnapshotStorage(ABC):
    """
    Abstract base class for snapshot backends.

    Implementations are called by URLStore only: load() once before the
    store starts serving, save() inside the store's critical section.
    """

    @abstractmethod
    def load(self) -> list[URLPair]:
        """
        Read the persisted snapshot.

        Returns:
            Every stored pair, in file order

        Raises:
            SnapshotCorruptedError: If the stored content cannot be parsed
            StorageError: If the backend cannot be read or initialized
        """
        pass

    @abstractmethod
    def save(self, pairs: list[URLPair]) -> None:
        """
        Replace the persisted snapshot with `pairs`.

        Args:
            pairs: The complete current state of the store (never a delta)

        Raises:
            PersistenceError: If the snapshot cannot be written
        """
        pass

    @property
    def enabled(self) -> bool:
        """Whether this backend actually persists anything."""
        return True
