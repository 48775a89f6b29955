"""
JSON File Snapshot Storage

This module implements SnapshotStorage on top of a single JSON file.

File format: a JSON array of {"short_url": ..., "original_url": ...}
objects, one per mapping. The whole file is rewritten on every save.

Key characteristics:
- Missing file is created empty on load
- Zero-byte file is an empty store
- Malformed content is fatal (SnapshotCorruptedError)
- Writes go to a temporary file that replaces the snapshot atomically
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from urlpresser.core.exceptions import PersistenceError, SnapshotCorruptedError, StorageError
from urlpresser.storage.interface import SnapshotStorage
from urlpresser.storage.models import URLPair, URLPairList

logger = logging.getLogger(__name__)


class JSONFileStorage(SnapshotStorage):
    """
    Snapshot storage backed by a JSON file.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Location of the snapshot file
        """
        self.path = Path(path)

    def load(self) -> list[URLPair]:
        """
        Load pairs from the snapshot file, creating it if it does not exist.

        Raises:
            SnapshotCorruptedError: On invalid JSON, invalid entries, or a
                short key or original URL that appears twice
            StorageError: If the file cannot be read or created
        """
        if not self.path.exists():
            self._create_empty()
            logger.info(f"Created empty snapshot file at {self.path}")
            return []

        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise StorageError(
                f"Failed to read snapshot file {self.path}: {e}",
                path=str(self.path),
                original_error=e
            )

        if not data.strip():
            return []

        try:
            pairs = URLPairList.validate_json(data)
        except ValidationError as e:
            raise SnapshotCorruptedError(
                f"Malformed snapshot file {self.path}: {e}",
                path=str(self.path),
                original_error=e
            )

        self._check_bijection(pairs)
        logger.info(f"Loaded {len(pairs)} URL pairs from {self.path}")
        return pairs

    def save(self, pairs: list[URLPair]) -> None:
        """
        Overwrite the snapshot file with every pair.

        Raises:
            PersistenceError: If the file cannot be written
        """
        payload = URLPairList.dump_json(pairs)
        tmp_path: Optional[str] = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(payload)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise PersistenceError(
                f"Failed to write snapshot file {self.path}: {e}",
                path=str(self.path),
                original_error=e
            )
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Wrote {len(pairs)} URL pairs to {self.path}")

    def _create_empty(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch()
        except OSError as e:
            raise StorageError(
                f"Failed to create snapshot file {self.path}: {e}",
                path=str(self.path),
                original_error=e
            )

    def _check_bijection(self, pairs: list[URLPair]) -> None:
        seen_short: set[str] = set()
        seen_original: set[str] = set()
        for pair in pairs:
            if pair.short_url in seen_short:
                raise SnapshotCorruptedError(
                    f"Duplicate short key '{pair.short_url}' in {self.path}",
                    path=str(self.path)
                )
            if pair.original_url in seen_original:
                raise SnapshotCorruptedError(
                    f"Duplicate original URL '{pair.original_url}' in {self.path}",
                    path=str(self.path)
                )
            seen_short.add(pair.short_url)
            seen_original.add(pair.original_url)


class NullStorage(SnapshotStorage):
    """
    In-memory mode: nothing is loaded and nothing is written.
    """

    def load(self) -> list[URLPair]:
        return []

    def save(self, pairs: list[URLPair]) -> None:
        return None

    @property
    def enabled(self) -> bool:
        return False


def get_snapshot_storage(path: Optional[Union[str, Path]]) -> SnapshotStorage:
    """
    Factory function to get the snapshot storage for a configured path.

    Returns NullStorage when no path is configured, JSONFileStorage otherwise.
    """
    if not path:
        return NullStorage()
    return JSONFileStorage(path)
