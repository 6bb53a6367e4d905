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

"""Checkpoint store settings management."""

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CheckpointSettings(BaseSettings):
    """Configuration for building a checkpoint store from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="SHARDMARK__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "shardmark"
    backend_url: str = Field(
        default="redis://localhost:6379/0",
        description="Backend URL: redis://, rediss://, memory://, file://, s3://",
    )
    socket_timeout: float | None = Field(default=5.0, description="Redis socket timeout (s)")
    socket_connect_timeout: float | None = Field(
        default=5.0,
        description="Redis connect timeout (s)",
    )
    strict_reads: bool = Field(
        default=False,
        description="Raise on backend read failures instead of returning an empty checkpoint",
    )

    @property
    def is_redis(self) -> bool:
        return self.backend_url.lower().startswith(("redis://", "rediss://", "unix://"))

    def client_options(self) -> dict[str, Any]:
        """Return backend-specific options for ``create_client``."""
        if not self.is_redis:
            return {}
        options: dict[str, Any] = {}
        if self.socket_timeout is not None:
            options["socket_timeout"] = self.socket_timeout
        if self.socket_connect_timeout is not None:
            options["socket_connect_timeout"] = self.socket_connect_timeout
        return options


@lru_cache
def get_settings() -> CheckpointSettings:
    """Return cached settings instance."""

    return CheckpointSettings()
