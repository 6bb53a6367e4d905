"""
Shardmark - Durable per-shard checkpoints for stream consumers

Features:
- One checkpoint per (application, stream, shard)
- Pluggable key-value backends (Redis, fsspec object stores, in-memory)
- Synchronous and asyncio stores sharing one key layout
"""

from shardmark.checkpoint import AsyncCheckpoint, Checkpoint
from shardmark.errors import (
    BackendReadError,
    BackendUnavailableError,
    BackendWriteError,
    CheckpointError,
    InvalidArgumentError,
)

__version__ = "0.1.0"
__all__ = [
    "Checkpoint",
    "AsyncCheckpoint",
    "CheckpointError",
    "InvalidArgumentError",
    "BackendUnavailableError",
    "BackendWriteError",
    "BackendReadError",
]
