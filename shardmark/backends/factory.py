# Copyright 2025 nurion team
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Factory helpers to create checkpoint clients without leaking concrete types."""

from typing import Any

from shardmark.backends.memory import MemoryClient
from shardmark.backends.object_store import ObjectStoreClient
from shardmark.backends.protocols import AsyncCheckpointClient, CheckpointClient
from shardmark.backends.redis_client import AsyncRedisClient, RedisClient
from shardmark.backends.threaded import ThreadedClient

REDIS_SCHEMES = ("redis://", "rediss://", "unix://")
MEMORY_URLS = ("memory", "memory:", "memory://")


def _is_redis(url: str) -> bool:
    return url.lower().startswith(REDIS_SCHEMES)


def create_client(url: str, **options: Any) -> CheckpointClient:
    """Create a checkpoint client from a URL.

    Args:
        url: Backend URL. Formats:
            - "redis://host:6379/0", "rediss://...", "unix:///path.sock" - Redis
            - "memory://" - Process-local dict
            - "memory://prefix", "file:///dir", "s3://bucket/prefix" - fsspec object store
        **options: Passed to redis-py or fsspec respectively.

    Returns:
        CheckpointClient instance (not yet pinged).

    Examples:
        >>> client = create_client("memory://")
        >>> client = create_client("redis://localhost:6379/0", socket_timeout=5)
        >>> client = create_client("s3://my-bucket/checkpoints")
    """
    url = url.strip()
    if _is_redis(url):
        return RedisClient.from_url(url, **options)
    if url.lower() in MEMORY_URLS:
        return MemoryClient()
    return ObjectStoreClient(url, **options)


def create_async_client(url: str, **options: Any) -> AsyncCheckpointClient:
    """Create an awaitable checkpoint client from a URL.

    Redis URLs get a native ``redis.asyncio`` client; every other backend is
    the synchronous client run in worker threads.
    """
    url = url.strip()
    if _is_redis(url):
        return AsyncRedisClient.from_url(url, **options)
    return ThreadedClient(create_client(url, **options))
