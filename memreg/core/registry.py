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

"""In-memory key/value registry with per-key locks and a global freeze.

This module provides controlled mutable state for bootstrap-time settings,
feature flags and container wiring:
- Scalar and flat array values
- Per-key lock masks forbidding individual mutations
- A one-way freeze that makes the whole registry read-only
- A process-wide default registry built from settings

Every write runs the same checks in the same order:
1. frozen check (FrozenError)
2. structural check: key defined, value is an array (NotDefinedError,
   NotArrayError, InvalidValueError)
3. lock check (LockedError)

Only then is the stored value touched. Reads never check anything and never
raise.

Example Usage:
    from memreg import LockFlag, MemoryRegistry

    registry = MemoryRegistry()
    registry.set("app.name", "demo", LockFlag.READONLY)
    registry.define("plugins", LockFlag.READ_MODIFY, array=True)
    registry.append("plugins", "auth").append("plugins", "billing")
    registry.freeze()

    registry.get("plugins")  # ["auth", "billing"]
"""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from typing import TYPE_CHECKING, Any, ContextManager, Dict, List, Optional

from memreg.core.errors import (
    AlreadyDefinedError,
    InvalidValueError,
    NotArrayError,
    NotDefinedError,
)
from memreg.core.locks import LockFlag, LockLedger, LockSpec
from memreg.core.values import (
    ArrayValue,
    Scalar,
    Value,
    ValueKind,
    as_list,
    assign_subkey,
    copy_value,
    has_subkey,
    is_array,
    kind_of,
    unassign_subkey,
)

if TYPE_CHECKING:
    from memreg.config.settings import RegistrySettings

logger = logging.getLogger(__name__)


class MemoryRegistry:
    """Registry storing values in a local dict.

    Not synchronized by default. With ``thread_safe=True`` a single re-entrant
    lock serializes every operation, reads and writes alike, so each write's
    check-then-mutate sequence is atomic.

    Example:
        registry = MemoryRegistry()
        registry.define("features", array=True)
        registry.assign("features", "beta", True)
        registry.is_assigned("features", "beta")  # True
    """

    def __init__(self, thread_safe: bool = False) -> None:
        self._values: Dict[str, Value] = {}
        self._locks = LockLedger()
        self._guard: ContextManager[Any] = threading.RLock() if thread_safe else nullcontext()
        self._thread_safe = thread_safe

    @classmethod
    def from_settings(cls, settings: Optional["RegistrySettings"] = None) -> "MemoryRegistry":
        """Create a registry configured by RegistrySettings.

        Applies the bootstrap file when one is configured, then freezes if the
        file or the settings ask for it.
        """
        from memreg.config.log_config import configure_logging
        from memreg.config.settings import get_settings
        from memreg.core.bootstrap import bootstrap_registry, load_bootstrap_file

        settings = settings or get_settings()
        if settings.log_level:
            configure_logging(settings.log_level)

        registry = cls(thread_safe=settings.thread_safe)
        if settings.bootstrap_file is not None:
            spec = load_bootstrap_file(settings.bootstrap_file)
            bootstrap_registry(registry, spec)
            if settings.freeze_after_bootstrap:
                registry.freeze()
        return registry

    @property
    def thread_safe(self) -> bool:
        return self._thread_safe

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, key: str, default: Value = None) -> Value:
        """Get a stored value, or default if the key is absent.

        Arrays are returned as copies.
        """
        with self._guard:
            if key not in self._values:
                return default
            return copy_value(self._values[key])

    def has(self, key: str) -> bool:
        with self._guard:
            return key in self._values

    def all(self) -> Dict[str, Value]:
        """Snapshot of every key and value, arrays copied."""
        with self._guard:
            return {key: copy_value(value) for key, value in self._values.items()}

    def keys(self) -> List[str]:
        with self._guard:
            return list(self._values)

    def is_assigned(self, key: str, subkey: str) -> bool:
        """True if key holds an array that contains subkey."""
        with self._guard:
            value = self._values.get(key)
            if not isinstance(subkey, str) or not is_array(value):
                return False
            return has_subkey(value, subkey)

    def is_frozen(self) -> bool:
        with self._guard:
            return self._locks.is_frozen()

    def lock_mask(self, key: str) -> LockFlag:
        """Lock mask recorded for key, READ_WRITE if none."""
        with self._guard:
            return self._locks.mask(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        with self._guard:
            return len(self._values)

    # =========================================================================
    # Writes
    # =========================================================================

    def freeze(self) -> None:
        """Make the registry read-only for the rest of its lifetime."""
        with self._guard:
            self._locks.freeze()

    def define(
        self, key: str, lock: LockSpec = LockFlag.READ_WRITE, array: bool = False
    ) -> "MemoryRegistry":
        """Create a key holding None (or an empty array) with a lock mask.

        Raises:
            FrozenError: If the registry is frozen
            AlreadyDefinedError: If the key exists
        """
        with self._guard:
            self._locks.assert_not_frozen("define", key)
            if key in self._values:
                raise AlreadyDefinedError("define", key)
            self._create(key, [] if array else None, lock)
            return self

    def set(self, key: str, value: Value, lock: LockSpec = LockFlag.READ_WRITE) -> "MemoryRegistry":
        """Store a value, defining the key first if needed.

        The lock only applies when the key is created. An existing key keeps
        its mask and may switch between scalar and array values.

        Raises:
            FrozenError: If the registry is frozen
            InvalidValueError: If value is not a scalar or flat array
            LockedError: If the existing key is locked with NO_SET
        """
        with self._guard:
            self._locks.assert_not_frozen("set", key)
            self._check_value("set", key, value, allow_array=True)
            if key not in self._values:
                self._create(key, copy_value(value), lock)
                return self
            self._locks.assert_not_locked("set", key, LockFlag.NO_SET)
            self._values[key] = copy_value(value)
            return self

    def clear(self, key: str) -> "MemoryRegistry":
        """Remove a key together with its lock mask. No-op if absent.

        Raises:
            FrozenError: If the registry is frozen
            LockedError: If the key is locked with NO_CLEAR
        """
        with self._guard:
            self._locks.assert_not_frozen("clear", key)
            if key in self._values:
                self._locks.assert_not_locked("clear", key, LockFlag.NO_CLEAR)
                del self._values[key]
                self._locks.unlock(key)
                logger.debug(f"Registry: cleared '{key}'")
            return self

    def assign(self, key: str, subkey: str, value: Scalar) -> "MemoryRegistry":
        """Set subkey -> value inside the array stored at key."""
        with self._guard:
            array = self._array_for("assign", key)
            self._check_subkey("assign", key, subkey)
            self._check_value("assign", key, value, allow_array=False)
            self._locks.assert_not_locked("assign", key, LockFlag.NO_ASSIGN)
            self._values[key] = assign_subkey(array, subkey, value)
            return self

    def unassign(self, key: str, subkey: str) -> "MemoryRegistry":
        """Remove subkey from the array stored at key, if present."""
        with self._guard:
            array = self._array_for("unassign", key)
            self._check_subkey("unassign", key, subkey)
            self._locks.assert_not_locked("unassign", key, LockFlag.NO_UNASSIGN)
            self._values[key] = unassign_subkey(array, subkey)
            return self

    def prepend(self, key: str, value: Scalar) -> "MemoryRegistry":
        """Insert value as the first element of the list stored at key."""
        with self._guard:
            items = self._list_for("prepend", key)
            self._check_value("prepend", key, value, allow_array=False)
            self._locks.assert_not_locked("prepend", key, LockFlag.NO_PREPEND)
            self._values[key] = [value] + items
            return self

    def append(self, key: str, value: Scalar) -> "MemoryRegistry":
        """Insert value as the last element of the list stored at key."""
        with self._guard:
            items = self._list_for("append", key)
            self._check_value("append", key, value, allow_array=False)
            self._locks.assert_not_locked("append", key, LockFlag.NO_APPEND)
            self._values[key] = items + [value]
            return self

    # =========================================================================
    # Internals
    # =========================================================================

    def _create(self, key: str, value: Value, lock: LockSpec) -> None:
        mask = LockFlag.parse(lock)
        self._values[key] = value
        self._locks.lock(key, mask)
        logger.debug(f"Registry: defined '{key}' (lock={mask!r})")

    def _array_for(self, action: str, key: str) -> ArrayValue:
        """Run the frozen and structural checks shared by array operations."""
        self._locks.assert_not_frozen(action, key)
        if key not in self._values:
            raise NotDefinedError(action, key)
        value = self._values[key]
        if not is_array(value):
            raise NotArrayError(action, key)
        return value

    def _list_for(self, action: str, key: str) -> List[Scalar]:
        items = as_list(self._array_for(action, key))
        if items is None:
            raise NotArrayError(action, key, "defined value must be a list-like array")
        return items

    @staticmethod
    def _check_subkey(action: str, key: str, subkey: Any) -> None:
        if not isinstance(subkey, str):
            raise InvalidValueError(
                action,
                key,
                "subkey must be a string",
                details={"type": type(subkey).__name__},
            )

    @staticmethod
    def _check_value(action: str, key: str, value: Any, allow_array: bool) -> None:
        kind = kind_of(value)
        if kind is None:
            raise InvalidValueError(action, key, details={"type": type(value).__name__})
        if kind is ValueKind.ARRAY and not allow_array:
            raise InvalidValueError(
                action,
                key,
                "value must be a scalar",
                details={"type": type(value).__name__},
            )


# =============================================================================
# Default Registry
# =============================================================================

_default_registry: Optional[MemoryRegistry] = None
_default_lock = threading.Lock()


def get_registry() -> MemoryRegistry:
    """Get the process-wide registry.

    Creates it from RegistrySettings on first use.
    """
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = MemoryRegistry.from_settings()
            logger.info(
                "Default registry created (thread_safe=%s, keys=%d)",
                _default_registry.thread_safe,
                len(_default_registry),
            )
        return _default_registry


def set_registry(registry: MemoryRegistry) -> None:
    """Replace the process-wide registry."""
    global _default_registry
    with _default_lock:
        _default_registry = registry


def reset_registry() -> None:
    """Drop the process-wide registry (for testing)."""
    global _default_registry
    with _default_lock:
        _default_registry = None


__all__ = [
    "MemoryRegistry",
    "get_registry",
    "set_registry",
    "reset_registry",
]
