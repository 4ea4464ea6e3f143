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

"""Error types raised by registry mutations.

Every failure raised by a registry write is a RegistryError carrying:
- the action name (define, set, clear, assign, ...)
- the key the action targeted
- a reason category for programmatic handling

Messages follow one shape so hosts can surface them directly:

    Registry action `assign` failed for plugins: registry is frozen
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from memreg.core.locks import LockFlag


# =============================================================================
# Error Reasons
# =============================================================================


class RegistryErrorReason(Enum):
    """Why a registry action was rejected."""

    FROZEN = "frozen"
    LOCKED = "locked"
    ALREADY_DEFINED = "already_defined"
    NOT_DEFINED = "not_defined"
    NOT_ARRAY = "not_array"
    INVALID_VALUE = "invalid_value"


# =============================================================================
# Exception Types
# =============================================================================


class RegistryError(Exception):
    """Base exception for invalid registry operations.

    Subclasses set ``reason`` and ``default_detail``; callers may override
    the detail text when a more specific explanation is available.
    """

    reason: RegistryErrorReason
    default_detail: str = "invalid registry operation"

    def __init__(
        self,
        action: str,
        key: str,
        detail: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.action = action
        self.key = key
        self.detail = detail or self.default_detail
        self.details = details or {}
        self.message = f"Registry action `{action}` failed for {key}: {self.detail}"
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error": self.message,
            "reason": self.reason.value,
            "action": self.action,
            "key": self.key,
            "details": self.details,
        }


class FrozenError(RegistryError):
    """Mutation attempted after the registry was frozen."""

    reason = RegistryErrorReason.FROZEN
    default_detail = "registry is frozen"


class LockedError(RegistryError):
    """Mutation forbidden by the key's lock mask."""

    reason = RegistryErrorReason.LOCKED
    default_detail = "value is locked for this action"

    def __init__(self, action: str, key: str, flags: "LockFlag", **kwargs: Any):
        super().__init__(action, key, **kwargs)
        self.flags = flags
        self.details["flags"] = flags.name or str(int(flags))


class AlreadyDefinedError(RegistryError):
    """define() called for a key that already exists."""

    reason = RegistryErrorReason.ALREADY_DEFINED
    default_detail = "is already defined"


class NotDefinedError(RegistryError):
    """Array operation on a key that does not exist."""

    reason = RegistryErrorReason.NOT_DEFINED
    default_detail = "is not defined"


class NotArrayError(RegistryError):
    """Array operation on a key whose value is not an array.

    Also raised by append() and prepend() on a dict array whose subkeys are
    not exactly "0".."n-1": such a dict is still an array, but these two
    operations only work on list-like arrays. They do not add the value under
    the next integer subkey.
    """

    reason = RegistryErrorReason.NOT_ARRAY
    default_detail = "defined value must be an array"


class InvalidValueError(RegistryError):
    """Value is neither a scalar nor a flat array of scalars, or a subkey is not a string."""

    reason = RegistryErrorReason.INVALID_VALUE
    default_detail = "value must be a scalar or a flat array of scalars"


class BootstrapLoadError(Exception):
    """Exception raised when loading a bootstrap document fails.

    Attributes:
        path: Path to the document that failed to load.
        message: Detailed error message.
        cause: Original exception that caused the failure.
    """

    def __init__(
        self,
        path: Path,
        message: str,
        cause: Optional[Exception] = None,
    ):
        self.path = path
        self.message = message
        self.cause = cause
        super().__init__(f"Failed to load {path}: {message}")


__all__ = [
    "RegistryErrorReason",
    "RegistryError",
    "FrozenError",
    "LockedError",
    "AlreadyDefinedError",
    "NotDefinedError",
    "NotArrayError",
    "InvalidValueError",
    "BootstrapLoadError",
]
