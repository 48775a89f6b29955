"""
Bidirectional URL Store

Owns the two mappings (original -> short, short -> original) and is the only
component allowed to mutate them.

Concurrency:
- One asyncio.Lock guards both mappings.
- get_or_create_short_url holds the lock across lookup, key generation,
  insertion and the snapshot write, so two requests for the same unseen URL
  can never produce two different keys.
- The snapshot write runs in a worker thread while the lock is held; it is
  serialized with every other store operation but does not block the loop.
  A cancelled request still waits for its write before releasing the lock.
"""

import asyncio
import logging
from typing import Callable, Optional

from urlpresser.core.exceptions import PersistenceError
from urlpresser.services.keygen import KeyGenerator
from urlpresser.storage.interface import SnapshotStorage
from urlpresser.storage.json_file import NullStorage
from urlpresser.storage.models import URLPair

logger = logging.getLogger(__name__)


class URLStore:
    """
    In-memory bijection between original URLs and short keys.

    Build it with URLStore.open() so persisted state is loaded before the
    store serves any request.
    """

    def __init__(
        self,
        storage: Optional[SnapshotStorage] = None,
        generator: Optional[Callable[[], str]] = None,
        fail_on_persist_error: bool = True,
        pairs: Optional[list[URLPair]] = None
    ):
        """
        Initialize the store.

        Args:
            storage: Snapshot backend (default: NullStorage, in-memory only)
            generator: Zero-argument callable returning candidate keys
            fail_on_persist_error: Raise PersistenceError when a snapshot write
                fails; when False the failure is logged and the key is returned
            pairs: Initial mappings, usually the result of storage.load()
        """
        self.storage = storage or NullStorage()
        self.generator = generator or KeyGenerator()
        self.fail_on_persist_error = fail_on_persist_error

        self._short_by_original: dict[str, str] = {}
        self._original_by_short: dict[str, str] = {}
        self._lock = asyncio.Lock()
        # Set while the snapshot on disk lags behind memory
        self._unsaved = False

        for pair in pairs or []:
            self._short_by_original[pair.original_url] = pair.short_url
            self._original_by_short[pair.short_url] = pair.original_url

    @classmethod
    def open(
        cls,
        storage: Optional[SnapshotStorage] = None,
        generator: Optional[Callable[[], str]] = None,
        fail_on_persist_error: bool = True
    ) -> "URLStore":
        """
        Create a store from the state held by `storage`.

        Raises:
            SnapshotCorruptedError: If the persisted snapshot is malformed
            StorageError: If the snapshot cannot be read or created
        """
        storage = storage or NullStorage()
        pairs = storage.load()
        store = cls(
            storage=storage,
            generator=generator,
            fail_on_persist_error=fail_on_persist_error,
            pairs=pairs
        )
        logger.info(
            f"URL store ready: {len(store)} mappings, "
            f"persistence={'on' if storage.enabled else 'off'}"
        )
        return store

    async def get_or_create_short_url(self, original_url: str) -> str:
        """
        Return the short key for `original_url`, creating one if needed.

        The same original URL always yields the same key for the lifetime of
        the store.

        Raises:
            PersistenceError: If the snapshot write fails and
                fail_on_persist_error is set. The mapping stays in memory,
                so a retry returns the same key and writes again.
        """
        async with self._lock:
            short_url = self._short_by_original.get(original_url)
            if short_url is not None:
                if self._unsaved:
                    await self._persist()
                return short_url

            short_url = self._generate_unique_key()
            self._short_by_original[original_url] = short_url
            self._original_by_short[short_url] = original_url
            logger.debug(f"Created mapping {short_url} -> {original_url}")

            await self._persist()
            return short_url

    async def resolve_original_url(self, short_url: str) -> tuple[Optional[str], bool]:
        """
        Look up the original URL behind a short key.

        Returns:
            (original_url, True) if the key exists, (None, False) otherwise
        """
        async with self._lock:
            original_url = self._original_by_short.get(short_url)
        return original_url, original_url is not None

    def pairs(self) -> list[URLPair]:
        """Snapshot of every mapping, in insertion order."""
        return [
            URLPair(short_url=short_url, original_url=original_url)
            for short_url, original_url in self._original_by_short.items()
        ]

    def __len__(self) -> int:
        return len(self._original_by_short)

    def _generate_unique_key(self) -> str:
        # Rejection sampling: loop until the key space yields an unused key
        while True:
            candidate = self.generator()
            if candidate not in self._original_by_short:
                return candidate
            logger.debug(f"Short key collision on {candidate}, regenerating")

    async def _persist(self) -> None:
        if not self.storage.enabled:
            return

        # Cleared only once a write of the current state has landed
        self._unsaved = True
        write = asyncio.ensure_future(asyncio.to_thread(self.storage.save, self.pairs()))
        try:
            await asyncio.shield(write)
        except asyncio.CancelledError:
            # The worker thread cannot be interrupted: keep holding the lock
            # until it finishes so no later write can be overtaken by it
            await asyncio.wait([write])
            if write.exception() is None:
                self._unsaved = False
            raise
        except PersistenceError:
            if self.fail_on_persist_error:
                raise
            logger.exception("Failed to persist URL store snapshot, continuing in memory")
        else:
            self._unsaved = False
