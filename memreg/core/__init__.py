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

"""Core registry: value model, lock ledger, store, bootstrap."""

from memreg.core.errors import (
    AlreadyDefinedError,
    BootstrapLoadError,
    FrozenError,
    InvalidValueError,
    LockedError,
    NotArrayError,
    NotDefinedError,
    RegistryError,
    RegistryErrorReason,
)
from memreg.core.locks import LockFlag, LockLedger
from memreg.core.protocols import ReadableRegistry, Registry
from memreg.core.registry import MemoryRegistry, get_registry, reset_registry, set_registry
from memreg.core.values import Scalar, Value, ValueKind, kind_of

__all__ = [
    # Errors
    "RegistryError",
    "RegistryErrorReason",
    "FrozenError",
    "LockedError",
    "AlreadyDefinedError",
    "NotDefinedError",
    "NotArrayError",
    "InvalidValueError",
    "BootstrapLoadError",
    # Locks
    "LockFlag",
    "LockLedger",
    # Protocols
    "ReadableRegistry",
    "Registry",
    # Store
    "MemoryRegistry",
    "get_registry",
    "set_registry",
    "reset_registry",
    # Values
    "Scalar",
    "Value",
    "ValueKind",
    "kind_of",
]
