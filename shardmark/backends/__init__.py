"""Key-value backends for checkpoint storage.

A checkpoint store talks to its backend through a three-operation capability
(get, set, ping). This package defines that capability and ships clients
implementing it.

Available clients:
- MemoryClient: Process-local dict, for tests and development
- RedisClient / AsyncRedisClient: redis-py connections
- ObjectStoreClient: One object per key on any fsspec filesystem
- ThreadedClient: Awaitable wrapper around any synchronous client

Example:
    ```python
    from shardmark.backends import create_client

    client = create_client("redis://localhost:6379/0")
    client.ping()
    client.set("app:checkpoint:orders:shard-0", "42")
    ```
"""

from shardmark.backends.protocols import (
    NO_EXPIRATION,
    AsyncCheckpointClient,
    CheckpointClient,
)
from shardmark.backends.memory import MemoryClient
from shardmark.backends.object_store import ObjectStoreClient
from shardmark.backends.redis_client import AsyncRedisClient, RedisClient
from shardmark.backends.threaded import ThreadedClient
from shardmark.backends.factory import create_async_client, create_client

__all__ = [
    "NO_EXPIRATION",
    "CheckpointClient",
    "AsyncCheckpointClient",
    "MemoryClient",
    "ObjectStoreClient",
    "RedisClient",
    "AsyncRedisClient",
    "ThreadedClient",
    "create_client",
    "create_async_client",
]
