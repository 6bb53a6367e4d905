"""Shared test fixtures."""

from __future__ import annotations

import uuid

import pytest

from shardmark import Checkpoint
from shardmark.backends import MemoryClient
from shardmark.settings import get_settings

from tests.helpers import RecordingClient


@pytest.fixture
def memory_client() -> MemoryClient:
    """Provide a fresh in-memory backend for each test."""
    return MemoryClient()


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def checkpoint(memory_client: MemoryClient) -> Checkpoint:
    return Checkpoint("order-consumer", memory_client)


@pytest.fixture
def memory_url() -> str:
    """Unique fsspec memory:// root so tests don't share objects."""
    return f"memory://shardmark-{uuid.uuid4().hex}"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
