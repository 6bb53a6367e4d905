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

"""
Backend client protocols.

A checkpoint store only needs three things from its key-value backend:
- get: read the value stored under a key
- set: write a value under a key, optionally with a TTL
- ping: cheap liveness probe

Two call shapes are supported:
- CheckpointClient: eager, returns values or raises
- AsyncCheckpointClient: the same operations as coroutines

Any object with matching methods satisfies the protocol; no subclassing needed.
"""

from typing import Optional, Protocol, runtime_checkable

# TTL value meaning "keep forever".
NO_EXPIRATION: float = 0


# =============================================================================
# Eager Protocol
# =============================================================================


@runtime_checkable
class CheckpointClient(Protocol):
    """Protocol for a synchronous key-value backend."""

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key.

        Returns:
            The stored string, or None (or "") if the key does not exist.

        Raises:
            Exception: Backend-specific errors for connectivity or protocol faults.
        """
        ...

    def set(self, key: str, value: str, ttl: float = NO_EXPIRATION) -> None:
        """Store value under key.

        Args:
            key: Key to write.
            value: Value to store.
            ttl: Time-to-live in seconds. 0 keeps the value forever.
        """
        ...

    def ping(self) -> bool:
        """Check the backend is reachable.

        Returns:
            True if the backend answered. Implementations may raise instead.
        """
        ...


# =============================================================================
# Awaitable Protocol
# =============================================================================


@runtime_checkable
class AsyncCheckpointClient(Protocol):
    """Protocol for an asyncio key-value backend."""

    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if missing."""
        ...

    async def set(self, key: str, value: str, ttl: float = NO_EXPIRATION) -> None:
        """Store value under key. ttl=0 keeps the value forever."""
        ...

    async def ping(self) -> bool:
        """Check the backend is reachable."""
        ...
