"""Shared test fixtures for stackstore tests."""

from __future__ import annotations

import pytest

from stackstore.blob import FileContainer, MemoryContainer


@pytest.fixture
def mem():
    """An empty in-memory container."""
    return MemoryContainer()


@pytest.fixture
def store_dir(tmp_path):
    """A temporary directory used as a filesystem container root."""
    path = tmp_path / "state"
    path.mkdir()
    return path


@pytest.fixture
def files(store_dir):
    """A filesystem container over ``store_dir``."""
    return FileContainer(store_dir)
