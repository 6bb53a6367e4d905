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

"""Redis-backed checkpoint clients.

Both clients are thin adapters over redis-py: they normalize values to
``str`` and translate the ``ttl`` convention (seconds, 0 = forever) into
``SET ... PX``. Connection pooling, retries and timeouts stay with redis-py.
"""

from typing import Any, Optional, Union

import redis
import redis.asyncio as aioredis

from shardmark.backends.protocols import NO_EXPIRATION


def _decode(value: Union[bytes, str, None]) -> Optional[str]:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _set_kwargs(ttl: float) -> dict:
    if ttl < 0:
        raise ValueError(f"ttl must be >= 0, got {ttl}")
    if ttl > 0:
        return {"px": int(ttl * 1000)}
    return {}


class RedisClient:
    """Checkpoint client over a ``redis.Redis`` connection.

    The connection is shared, not owned: call ``close()`` only when the
    caller created this client through ``from_url``.
    """

    def __init__(self, connection: redis.Redis):
        self.connection = connection

    @classmethod
    def from_url(cls, url: str, **options: Any) -> "RedisClient":
        """Create a client from a ``redis://`` / ``rediss://`` / ``unix://`` URL."""
        options.setdefault("decode_responses", True)
        return cls(redis.Redis.from_url(url, **options))

    def get(self, key: str) -> Optional[str]:
        return _decode(self.connection.get(key))

    def set(self, key: str, value: str, ttl: float = NO_EXPIRATION) -> None:
        self.connection.set(key, value, **_set_kwargs(ttl))

    def ping(self) -> bool:
        return bool(self.connection.ping())

    def close(self) -> None:
        self.connection.close()


class AsyncRedisClient:
    """Checkpoint client over a ``redis.asyncio.Redis`` connection."""

    def __init__(self, connection: aioredis.Redis):
        self.connection = connection

    @classmethod
    def from_url(cls, url: str, **options: Any) -> "AsyncRedisClient":
        options.setdefault("decode_responses", True)
        return cls(aioredis.Redis.from_url(url, **options))

    async def get(self, key: str) -> Optional[str]:
        return _decode(await self.connection.get(key))

    async def set(self, key: str, value: str, ttl: float = NO_EXPIRATION) -> None:
        await self.connection.set(key, value, **_set_kwargs(ttl))

    async def ping(self) -> bool:
        return bool(await self.connection.ping())

    async def close(self) -> None:
        await self.connection.aclose()
