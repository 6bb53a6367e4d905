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

"""Shard checkpoint stores.

A checkpoint records the sequence number of the last record an application
processed on a shard. On failover, processing resumes from that point.

Checkpoints live in a key-value backend under keys of the form::

    <app_name>:checkpoint:<stream_name>:<shard_id>

This layout is shared with existing deployments and must not change.
Components are not escaped, so names containing ":" can collide.

Example:
    ```python
    from shardmark import Checkpoint
    from shardmark.backends import create_client

    ckpt = Checkpoint("order-consumer", create_client("redis://localhost:6379/0"))

    start_after = ckpt.get("orders", "shard-0")  # "" on first run
    for record in consume("orders", "shard-0", after=start_after):
        handle(record)
        ckpt.set("orders", "shard-0", record.sequence_number)
    ```
"""

import logging
from typing import Any, Optional

from shardmark.backends.factory import create_async_client, create_client
from shardmark.backends.protocols import NO_EXPIRATION, AsyncCheckpointClient, CheckpointClient
from shardmark.errors import (
    BackendReadError,
    BackendUnavailableError,
    BackendWriteError,
    InvalidArgumentError,
)
from shardmark.settings import CheckpointSettings, get_settings

logger = logging.getLogger(__name__)

KEY_SEGMENT = "checkpoint"

_CREATE_TOKEN = object()


class _CheckpointBase:
    """Key derivation and argument checks shared by both store flavours."""

    def __init__(self, app_name: str, client: Any, strict_reads: bool = False):
        if client is None:
            raise InvalidArgumentError("client reference is None")
        self._app_name = app_name
        self._client = client
        self.strict_reads = strict_reads

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def client(self) -> Any:
        return self._client

    def key(self, stream_name: str, shard_id: str) -> str:
        """Return the backend key holding the checkpoint for a shard."""
        return f"{self._app_name}:{KEY_SEGMENT}:{stream_name}:{shard_id}"

    @staticmethod
    def _check_sequence_number(sequence_number: Optional[str]) -> None:
        if not sequence_number:
            raise InvalidArgumentError("sequence number should not be empty")

    def _read_failed(self, key: str, exc: Exception) -> str:
        if self.strict_reads:
            raise BackendReadError(f"Failed to read checkpoint {key}: {exc}") from exc
        # Treated as "no checkpoint"; the consumer restarts the shard from the beginning.
        logger.warning(f"Failed to read checkpoint {key}, treating as absent: {exc!r}")
        return ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(app_name={self._app_name!r}, client={self._client!r})"


class Checkpoint(_CheckpointBase):
    """Stores and retrieves per-shard checkpoints in a key-value backend.

    The client is shared, not owned: the store never closes it. The store
    keeps no mutable state, so one instance can serve many shard workers
    concurrently as long as the client is thread-safe.

    Args:
        app_name: Application name, the first key segment.
        client: Backend implementing ``CheckpointClient``.
        strict_reads: Raise ``BackendReadError`` when the backend fails a read
            instead of reporting "no checkpoint".

    Raises:
        InvalidArgumentError: If ``client`` is None.
        BackendUnavailableError: If the backend does not answer the liveness probe.
    """

    def __init__(self, app_name: str, client: CheckpointClient, strict_reads: bool = False):
        super().__init__(app_name, client, strict_reads)
        try:
            alive = client.ping()
        except Exception as exc:
            raise BackendUnavailableError(f"Backend ping failed: {exc}") from exc
        if alive is False:
            raise BackendUnavailableError("Backend ping returned False")
        logger.info(f"Checkpoint store ready for app {app_name!r}")

    @classmethod
    def from_settings(cls, settings: Optional[CheckpointSettings] = None) -> "Checkpoint":
        """Build a store and its client from ``CheckpointSettings``."""
        settings = settings or get_settings()
        client = create_client(settings.backend_url, **settings.client_options())
        try:
            return cls(settings.app_name, client, strict_reads=settings.strict_reads)
        except BackendUnavailableError:
            close = getattr(client, "close", None)
            if close is not None:
                close()
            raise

    def get(self, stream_name: str, shard_id: str) -> str:
        """Fetch the checkpoint for a shard.

        Returns:
            The stored sequence number, or "" if the shard has no checkpoint.
            Unless ``strict_reads`` is set, backend failures also yield "".
        """
        key = self.key(stream_name, shard_id)
        try:
            value = self._client.get(key)
        except Exception as exc:
            return self._read_failed(key, exc)
        return value or ""

    def set(self, stream_name: str, shard_id: str, sequence_number: str) -> None:
        """Store the checkpoint for a shard, overwriting any previous value.

        The value never expires. There is no retry; retrying is up to the caller.

        Raises:
            InvalidArgumentError: If ``sequence_number`` is empty.
            BackendWriteError: If the backend write fails.
        """
        self._check_sequence_number(sequence_number)
        key = self.key(stream_name, shard_id)
        try:
            self._client.set(key, sequence_number, NO_EXPIRATION)
        except Exception as exc:
            raise BackendWriteError(f"Failed to write checkpoint {key}: {exc}") from exc
        logger.debug(f"Checkpoint {key} = {sequence_number}")


class AsyncCheckpoint(_CheckpointBase):
    """Awaitable counterpart of ``Checkpoint`` for asyncio consumers.

    Build instances with ``await AsyncCheckpoint.create(...)`` so the liveness
    probe runs before the store is handed out.
    """

    def __init__(
        self,
        app_name: str,
        client: AsyncCheckpointClient,
        strict_reads: bool = False,
        *,
        _token: object = None,
    ):
        if _token is not _CREATE_TOKEN:
            raise TypeError("AsyncCheckpoint must be built with await AsyncCheckpoint.create(...)")
        super().__init__(app_name, client, strict_reads)

    @classmethod
    async def create(
        cls,
        app_name: str,
        client: AsyncCheckpointClient,
        strict_reads: bool = False,
    ) -> "AsyncCheckpoint":
        """Probe the backend and return a ready store.

        Raises:
            InvalidArgumentError: If ``client`` is None.
            BackendUnavailableError: If the backend does not answer the liveness probe.
        """
        store = cls(app_name, client, strict_reads, _token=_CREATE_TOKEN)
        try:
            alive = await client.ping()
        except Exception as exc:
            raise BackendUnavailableError(f"Backend ping failed: {exc}") from exc
        if alive is False:
            raise BackendUnavailableError("Backend ping returned False")
        logger.info(f"Async checkpoint store ready for app {app_name!r}")
        return store

    @classmethod
    async def from_settings(cls, settings: Optional[CheckpointSettings] = None) -> "AsyncCheckpoint":
        settings = settings or get_settings()
        client = create_async_client(settings.backend_url, **settings.client_options())
        try:
            return await cls.create(settings.app_name, client, strict_reads=settings.strict_reads)
        except BackendUnavailableError:
            close = getattr(client, "close", None)
            if close is not None:
                await close()
            raise

    async def get(self, stream_name: str, shard_id: str) -> str:
        """Fetch the checkpoint for a shard; "" if none is stored."""
        key = self.key(stream_name, shard_id)
        try:
            value = await self._client.get(key)
        except Exception as exc:
            return self._read_failed(key, exc)
        return value or ""

    async def set(self, stream_name: str, shard_id: str, sequence_number: str) -> None:
        """Store the checkpoint for a shard with no expiry."""
        self._check_sequence_number(sequence_number)
        key = self.key(stream_name, shard_id)
        try:
            await self._client.set(key, sequence_number, NO_EXPIRATION)
        except Exception as exc:
            raise BackendWriteError(f"Failed to write checkpoint {key}: {exc}") from exc
        logger.debug(f"Checkpoint {key} = {sequence_number}")
