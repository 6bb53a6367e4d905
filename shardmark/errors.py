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

"""Exceptions raised by checkpoint stores."""


class CheckpointError(RuntimeError):
    """Base class for checkpoint store failures."""


class InvalidArgumentError(CheckpointError, ValueError):
    """Raised when a caller passes a missing client or an empty sequence number."""


class BackendUnavailableError(CheckpointError):
    """Raised when the backend fails its liveness probe at construction."""


class BackendWriteError(CheckpointError):
    """Raised when the backend rejects or fails a checkpoint write."""


class BackendReadError(CheckpointError):
    """Raised by strict-read stores when the backend fails a checkpoint read."""
