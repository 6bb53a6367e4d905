"""Test helpers shared across test modules."""

from __future__ import annotations

from typing import Optional

from shardmark.backends import MemoryClient


class RecordingClient(MemoryClient):
    """MemoryClient that records calls and can be told to fail."""

    def __init__(
        self,
        ping_error: Optional[Exception] = None,
        get_error: Optional[Exception] = None,
        set_error: Optional[Exception] = None,
        ping_result: bool = True,
    ):
        super().__init__()
        self.ping_error = ping_error
        self.get_error = get_error
        self.set_error = set_error
        self.ping_result = ping_result
        self.calls: list[tuple] = []

    def get(self, key):
        self.calls.append(("get", key))
        if self.get_error is not None:
            raise self.get_error
        return super().get(key)

    def set(self, key, value, ttl=0):
        self.calls.append(("set", key, value, ttl))
        if self.set_error is not None:
            raise self.set_error
        super().set(key, value, ttl)

    def ping(self):
        self.calls.append(("ping",))
        if self.ping_error is not None:
            raise self.ping_error
        super().ping()
        return self.ping_result

    def count(self, op: str) -> int:
        return sum(1 for call in self.calls if call[0] == op)
