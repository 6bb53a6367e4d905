"""Tests for the asyncio checkpoint store.

Covers AsyncCheckpoint over a thread-wrapped MemoryClient and over a
mocked redis.asyncio connection.
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from shardmark import (
    AsyncCheckpoint,
    BackendReadError,
    BackendUnavailableError,
    BackendWriteError,
    InvalidArgumentError,
)
from shardmark.backends import AsyncRedisClient, MemoryClient, ThreadedClient
from shardmark.settings import CheckpointSettings

from tests.helpers import RecordingClient

# Configure pytest-asyncio
pytestmark = pytest.mark.asyncio(loop_scope="function")


# ============================================================================
# Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def async_checkpoint(memory_client: MemoryClient) -> AsyncCheckpoint:
    return await AsyncCheckpoint.create("order-consumer", ThreadedClient(memory_client))


# ============================================================================
# Tests
# ============================================================================


class TestAsyncCheckpoint:
    async def test_round_trip(self, async_checkpoint: AsyncCheckpoint):
        await async_checkpoint.set("orders", "shard-0", "12345")
        assert await async_checkpoint.get("orders", "shard-0") == "12345"

    async def test_missing_key_returns_empty_string(self, async_checkpoint: AsyncCheckpoint):
        assert await async_checkpoint.get("orders", "shard-9") == ""

    async def test_overwrite(self, async_checkpoint: AsyncCheckpoint):
        await async_checkpoint.set("orders", "shard-0", "100")
        await async_checkpoint.set("orders", "shard-0", "200")
        assert await async_checkpoint.get("orders", "shard-0") == "200"

    async def test_same_key_layout_as_sync_store(
        self, async_checkpoint: AsyncCheckpoint, memory_client: MemoryClient
    ):
        await async_checkpoint.set("orders", "shard-0", "5")
        assert memory_client.get("order-consumer:checkpoint:orders:shard-0") == "5"

    async def test_empty_sequence_number_rejected(self, recording_client: RecordingClient):
        store = await AsyncCheckpoint.create("app", ThreadedClient(recording_client))

        with pytest.raises(InvalidArgumentError):
            await store.set("orders", "shard-0", "")

        assert recording_client.count("set") == 0

    async def test_none_client_rejected(self):
        with pytest.raises(InvalidArgumentError):
            await AsyncCheckpoint.create("app", None)

    async def test_direct_construction_refused(self):
        inner = RecordingClient(ping_error=ConnectionError("down"))

        with pytest.raises(TypeError):
            AsyncCheckpoint("app", ThreadedClient(inner))

        assert inner.count("ping") == 0

    async def test_from_settings_closes_client_when_unavailable(self, monkeypatch):
        inner = RecordingClient(ping_error=ConnectionError("down"))
        monkeypatch.setattr(
            "shardmark.checkpoint.create_async_client",
            lambda url, **options: ThreadedClient(inner),
        )

        with pytest.raises(BackendUnavailableError):
            await AsyncCheckpoint.from_settings(CheckpointSettings(backend_url="memory://"))

        assert inner.closed

    async def test_ping_failure_prevents_construction(self):
        error = ConnectionError("connection refused")
        client = ThreadedClient(RecordingClient(ping_error=error))

        with pytest.raises(BackendUnavailableError) as exc_info:
            await AsyncCheckpoint.create("app", client)

        assert exc_info.value.__cause__ is error

    async def test_write_failure_surfaces(self):
        client = ThreadedClient(RecordingClient(set_error=TimeoutError("timed out")))
        store = await AsyncCheckpoint.create("app", client)

        with pytest.raises(BackendWriteError):
            await store.set("orders", "shard-0", "1")

    async def test_read_failure_returns_empty_by_default(self):
        client = ThreadedClient(RecordingClient(get_error=ConnectionError("reset")))
        store = await AsyncCheckpoint.create("app", client)

        assert await store.get("orders", "shard-0") == ""

    async def test_read_failure_raises_in_strict_mode(self):
        client = ThreadedClient(RecordingClient(get_error=ConnectionError("reset")))
        store = await AsyncCheckpoint.create("app", client, strict_reads=True)

        with pytest.raises(BackendReadError):
            await store.get("orders", "shard-0")

    async def test_from_settings(self):
        settings = CheckpointSettings(app_name="async-app", backend_url="memory://")

        store = await AsyncCheckpoint.from_settings(settings)
        await store.set("orders", "shard-0", "3")

        assert isinstance(store.client, ThreadedClient)
        assert await store.get("orders", "shard-0") == "3"


class TestAsyncCheckpointOverRedis:
    @pytest.fixture
    def connection(self):
        conn = AsyncMock()
        conn.ping.return_value = True
        return conn

    async def test_construction_pings_once(self, connection):
        await AsyncCheckpoint.create("app", AsyncRedisClient(connection))
        connection.ping.assert_awaited_once()

    async def test_get_decodes_bytes(self, connection):
        connection.get.return_value = b"987"
        store = await AsyncCheckpoint.create("app", AsyncRedisClient(connection))

        assert await store.get("orders", "shard-0") == "987"
        connection.get.assert_awaited_once_with("app:checkpoint:orders:shard-0")

    async def test_get_missing(self, connection):
        connection.get.return_value = None
        store = await AsyncCheckpoint.create("app", AsyncRedisClient(connection))

        assert await store.get("orders", "shard-0") == ""

    async def test_set_without_expiry(self, connection):
        store = await AsyncCheckpoint.create("app", AsyncRedisClient(connection))

        await store.set("orders", "shard-0", "42")

        connection.set.assert_awaited_once_with("app:checkpoint:orders:shard-0", "42")

    async def test_ping_error(self, connection):
        connection.ping.side_effect = OSError("unreachable")

        with pytest.raises(BackendUnavailableError):
            await AsyncCheckpoint.create("app", AsyncRedisClient(connection))
