"""Tests for the JSON file and in-memory snapshot storages."""

import json

import pytest

from urlpresser.core.exceptions import PersistenceError, SnapshotCorruptedError
from urlpresser.storage import JSONFileStorage, NullStorage, URLPair, get_snapshot_storage


class TestJSONFileStorageLoad:
    """Test reading snapshots at startup."""

    def test_missing_file_is_created_empty(self, tmp_path):
        path = tmp_path / "nested" / "db.json"
        assert JSONFileStorage(path).load() == []
        assert path.exists()
        assert path.read_bytes() == b""

    def test_empty_file_is_empty_store(self, snapshot_path):
        snapshot_path.write_text("")
        assert JSONFileStorage(snapshot_path).load() == []

    def test_reads_pairs_in_file_order(self, snapshot_path):
        snapshot_path.write_text(json.dumps([
            {"short_url": "abc123", "original_url": "https://a.example/"},
            {"short_url": "XYZ789", "original_url": "https://b.example/"},
        ]))

        assert JSONFileStorage(snapshot_path).load() == [
            URLPair(short_url="abc123", original_url="https://a.example/"),
            URLPair(short_url="XYZ789", original_url="https://b.example/"),
        ]

    @pytest.mark.parametrize("content", [
        "not json",
        '{"short_url": "abc123", "original_url": "https://a.example/"}',
        '[{"short_url": "abc123"}]',
        '[{"short_url": 5, "original_url": "https://a.example/"}]',
        '[{"short_url": "", "original_url": "https://a.example/"}]',
    ])
    def test_malformed_content_is_fatal(self, snapshot_path, content):
        snapshot_path.write_text(content)
        with pytest.raises(SnapshotCorruptedError):
            JSONFileStorage(snapshot_path).load()

    def test_duplicate_short_key_is_fatal(self, snapshot_path):
        snapshot_path.write_text(json.dumps([
            {"short_url": "abc123", "original_url": "https://a.example/"},
            {"short_url": "abc123", "original_url": "https://b.example/"},
        ]))
        with pytest.raises(SnapshotCorruptedError):
            JSONFileStorage(snapshot_path).load()

    def test_duplicate_original_is_fatal(self, snapshot_path):
        snapshot_path.write_text(json.dumps([
            {"short_url": "abc123", "original_url": "https://a.example/"},
            {"short_url": "def456", "original_url": "https://a.example/"},
        ]))
        with pytest.raises(SnapshotCorruptedError):
            JSONFileStorage(snapshot_path).load()


class TestJSONFileStorageSave:
    """Test full rewrites of the snapshot."""

    def test_save_overwrites_whole_file(self, snapshot_path):
        storage = JSONFileStorage(snapshot_path)
        storage.save([
            URLPair(short_url="abc123", original_url="https://a.example/"),
            URLPair(short_url="def456", original_url="https://b.example/"),
        ])
        storage.save([URLPair(short_url="ghi789", original_url="https://c.example/")])

        assert json.loads(snapshot_path.read_text()) == [
            {"short_url": "ghi789", "original_url": "https://c.example/"}
        ]

    def test_save_leaves_no_temp_files(self, snapshot_path):
        JSONFileStorage(snapshot_path).save([
            URLPair(short_url="abc123", original_url="https://a.example/")
        ])
        assert [p.name for p in snapshot_path.parent.iterdir()] == [snapshot_path.name]

    def test_save_then_load(self, snapshot_path):
        pairs = [URLPair(short_url="abc123", original_url="https://a.example/?q=ä")]
        storage = JSONFileStorage(snapshot_path)
        storage.save(pairs)
        assert storage.load() == pairs

    def test_unwritable_location_raises_persistence_error(self, tmp_path):
        storage = JSONFileStorage(tmp_path / "missing-dir" / "db.json")
        with pytest.raises(PersistenceError):
            storage.save([URLPair(short_url="abc123", original_url="https://a.example/")])


class TestStorageFactory:
    """Test selecting the storage from configuration."""

    @pytest.mark.parametrize("path", [None, ""])
    def test_no_path_means_in_memory(self, path):
        storage = get_snapshot_storage(path)
        assert isinstance(storage, NullStorage)
        assert not storage.enabled

    def test_path_means_json_file(self, snapshot_path):
        storage = get_snapshot_storage(str(snapshot_path))
        assert isinstance(storage, JSONFileStorage)
        assert storage.enabled

    def test_null_storage_is_a_no_op(self):
        storage = NullStorage()
        storage.save([URLPair(short_url="abc123", original_url="https://a.example/")])
        assert storage.load() == []
