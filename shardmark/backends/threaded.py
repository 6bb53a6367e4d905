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

"""Run a blocking checkpoint client from asyncio code."""

from __future__ import annotations

import asyncio

from shardmark.backends.protocols import NO_EXPIRATION, CheckpointClient


class ThreadedClient:
    """Expose a synchronous client through the awaitable protocol.

    Every call is dispatched with ``asyncio.to_thread`` so the event loop is
    never blocked by backend I/O. The wrapped client must be thread-safe.
    """

    def __init__(self, client: CheckpointClient):
        self.client = client

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self.client.get, key)

    async def set(self, key: str, value: str, ttl: float = NO_EXPIRATION) -> None:
        await asyncio.to_thread(self.client.set, key, value, ttl)

    async def ping(self) -> bool:
        return await asyncio.to_thread(self.client.ping)

    async def close(self) -> None:
        """Close the wrapped client if it supports closing."""
        close = getattr(self.client, "close", None)
        if close is not None:
            await asyncio.to_thread(close)
