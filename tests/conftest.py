"""
Shared fixtures for the URL shortener tests.

Every test gets its own store and application; nothing is shared between
tests through module state.
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from urlpresser.core.setting import Settings
from urlpresser.main import create_app

BASE_URL = "http://localhost:8000/"


class ScriptedGenerator:
    """Key generator returning a fixed sequence, then a numbered fallback."""

    def __init__(self, *keys: str):
        self._keys = iter(keys)
        self._fallback = (f"key{n:03d}" for n in itertools.count())
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return next(self._keys, None) or next(self._fallback)


@pytest.fixture
def snapshot_path(tmp_path):
    """Path of a snapshot file that does not exist yet."""
    return tmp_path / "short-url-db.json"


@pytest.fixture
def memory_settings():
    """Settings with persistence disabled."""
    return Settings(_env_file=None, BASE_URL=BASE_URL, FILE_STORAGE_PATH="")


@pytest.fixture
def file_settings(snapshot_path):
    """Settings persisting to a temporary snapshot file."""
    return Settings(_env_file=None, BASE_URL=BASE_URL, FILE_STORAGE_PATH=str(snapshot_path))


@pytest.fixture
def client(memory_settings):
    """TestClient for an in-memory application."""
    app = create_app(memory_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def file_client(file_settings):
    """TestClient for an application persisting to snapshot_path."""
    app = create_app(file_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def scripted_generator():
    """Factory for generators that return a fixed sequence of keys."""
    return ScriptedGenerator
