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

"""In-memory key-value client.

This client keeps checkpoints in a process-local dict. It is meant for
tests, local development and single-process jobs where losing progress on
restart is acceptable.

Features:
- Thread-safe for concurrent access
- Optional per-key TTL, evicted lazily on read

Limitations:
- Data is lost on process restart
- Not shared between processes
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from shardmark.backends.protocols import NO_EXPIRATION


@dataclass
class _Entry:
    """Stored value with its absolute expiry (None = never)."""

    value: str
    expires_at: Optional[float] = None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemoryClient:
    """Process-local checkpoint backend.

    Thread Safety:
        All operations take a single lock and can be called concurrently
        from multiple shard workers.

    Example:
        ```python
        client = MemoryClient()
        client.set("app:checkpoint:orders:shard-0", "42")
        client.get("app:checkpoint:orders:shard-0")  # "42"
        ```
    """

    def __init__(
        self,
        initial: Optional[Dict[str, str]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the client.

        Args:
            initial: Optional key/value pairs to preload (no expiry).
            clock: Monotonic time source used for TTL expiry.
        """
        self._clock = clock
        self._data: Dict[str, _Entry] = {k: _Entry(v) for k, v in (initial or {}).items()}
        self._lock = threading.Lock()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ConnectionError("MemoryClient is closed")

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            self._check_open()
            entry = self._data.get(key)
            if entry is None:
                return None
            if entry.expired(self._clock()):
                del self._data[key]
                return None
            return entry.value

    def set(self, key: str, value: str, ttl: float = NO_EXPIRATION) -> None:
        if ttl < 0:
            raise ValueError(f"ttl must be >= 0, got {ttl}")
        expires_at = self._clock() + ttl if ttl > 0 else None
        with self._lock:
            self._check_open()
            self._data[key] = _Entry(value, expires_at)

    def ping(self) -> bool:
        with self._lock:
            self._check_open()
        return True

    def keys(self) -> list:
        """Return all live keys, sorted (useful for inspection in tests)."""
        now = self._clock()
        with self._lock:
            return sorted(k for k, e in self._data.items() if not e.expired(now))

    def close(self) -> None:
        """Mark the client closed; later calls raise ConnectionError."""
        with self._lock:
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self.keys())
