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

"""Object-store checkpoint client backed by fsspec.

Each key is one small object under a base URL. Colons in the key become
path separators, so ``app:checkpoint:orders:shard-0`` is stored at
``<base>/app/checkpoint/orders/shard-0``. Every part is percent-encoded
so "/" and "%" inside a part stay inside one path level; an empty part is
stored as a bare "%" and "." or ".." parts have their dots encoded.
A bare "%" and "%2E" never come out of quote(), so distinct keys
always map to distinct objects under the base path.

Supported URLs are whatever fsspec can open, for example:
- memory://checkpoints - In-memory filesystem (for testing)
- file:///var/lib/app/checkpoints - Local filesystem
- s3://bucket/prefix - S3 (requires s3fs)
"""

import logging
import posixpath
from typing import Any, Optional
from urllib.parse import quote

from fsspec.core import url_to_fs

from shardmark.backends.protocols import NO_EXPIRATION

logger = logging.getLogger(__name__)

EMPTY_PART = "%"


def encode_part(part: str) -> str:
    """Encode one colon-separated key part as a single path segment."""
    if not part:
        return EMPTY_PART
    if part in (".", ".."):
        return "%2E" * len(part)
    return quote(part, safe="")


class ObjectStoreClient:
    """Checkpoint client storing one object per key via fsspec.

    Object stores have no native expiry, so only ``ttl=0`` is accepted.
    """

    def __init__(self, base_url: str, **storage_options: Any):
        """
        Args:
            base_url: Base URL (e.g., memory://ckpt, file:///tmp/ckpt, s3://bucket/prefix).
            **storage_options: Additional options passed to fsspec, such as
                credentials or endpoint configuration.
        """
        self.base_url = base_url
        self.fs, root = url_to_fs(base_url, **storage_options)
        self.root = root.rstrip("/")

    def _path(self, key: str) -> str:
        relative = "/".join(encode_part(part) for part in key.split(":"))
        return f"{self.root}/{relative}" if self.root else relative

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            with self.fs.open(path, "rb") as f:
                return f.read().decode("utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str, ttl: float = NO_EXPIRATION) -> None:
        if ttl != NO_EXPIRATION:
            raise ValueError("ObjectStoreClient does not support ttl; use ttl=0")
        path = self._path(key)
        parent = posixpath.dirname(path)
        if parent:
            self.fs.makedirs(parent, exist_ok=True)
        with self.fs.open(path, "wb") as f:
            f.write(value.encode("utf-8"))
        logger.debug(f"Put {self.fs.unstrip_protocol(path)} ({len(value)} chars)")

    def ping(self) -> bool:
        """Check the base path is reachable, creating it if missing."""
        if self.root and not self.fs.exists(self.root):
            self.fs.makedirs(self.root, exist_ok=True)
        return True
