# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
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

"""Protocol definitions for registry consumers.

Two roles use a registry:
- the host that seeds it during bootstrap and then freezes it
- consumers that only read after the freeze

Depending on ReadableRegistry rather than MemoryRegistry keeps consumers
from reaching for write methods they are not meant to call.

Usage Example:
    from memreg.core.protocols import ReadableRegistry

    class PluginLoader:
        def __init__(self, registry: ReadableRegistry):
            self.names = registry.get("plugins", [])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Protocol, runtime_checkable

if TYPE_CHECKING:
    from memreg.core.locks import LockSpec
    from memreg.core.values import Scalar, Value


@runtime_checkable
class ReadableRegistry(Protocol):
    """Read side of a registry. None of these methods raise."""

    def get(self, key: str, default: "Value" = None) -> "Value":
        """Stored value, or default if the key is absent."""
        ...

    def has(self, key: str) -> bool:
        """Whether the key is defined, regardless of its value."""
        ...

    def all(self) -> Dict[str, "Value"]:
        """Snapshot of every key and value."""
        ...

    def keys(self) -> List[str]:
        """Every defined key."""
        ...

    def is_assigned(self, key: str, subkey: str) -> bool:
        """Whether key holds an array containing subkey."""
        ...

    def is_frozen(self) -> bool:
        """Whether mutation has been disabled."""
        ...


@runtime_checkable
class Registry(ReadableRegistry, Protocol):
    """Full read/write registry. Write methods return the registry."""

    def freeze(self) -> None:
        ...

    def define(self, key: str, lock: "LockSpec" = ..., array: bool = False) -> "Registry":
        ...

    def set(self, key: str, value: "Value", lock: "LockSpec" = ...) -> "Registry":
        ...

    def clear(self, key: str) -> "Registry":
        ...

    def assign(self, key: str, subkey: str, value: "Scalar") -> "Registry":
        ...

    def unassign(self, key: str, subkey: str) -> "Registry":
        ...

    def prepend(self, key: str, value: "Scalar") -> "Registry":
        ...

    def append(self, key: str, value: "Scalar") -> "Registry":
        ...


__all__ = [
    "ReadableRegistry",
    "Registry",
]
