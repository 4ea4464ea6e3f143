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

"""memreg - controlled mutable state for single-process bootstrap.

An in-memory key/value registry replacing ad-hoc global variables:
- Scalar and flat array values
- Per-key lock masks (LockFlag) forbidding individual mutations
- A one-way freeze that makes the whole registry read-only
- Declarative seeding from YAML

Example:
    from memreg import LockFlag, MemoryRegistry

    registry = MemoryRegistry()
    registry.set("debug", False, LockFlag.READONLY)
    registry.freeze()

    registry.get("debug")        # False
    registry.set("debug", True)  # raises FrozenError
"""

__version__ = "0.1.0"

from memreg.core import (
    AlreadyDefinedError,
    BootstrapLoadError,
    FrozenError,
    InvalidValueError,
    LockedError,
    LockFlag,
    LockLedger,
    MemoryRegistry,
    NotArrayError,
    NotDefinedError,
    ReadableRegistry,
    Registry,
    RegistryError,
    RegistryErrorReason,
    Value,
    ValueKind,
    get_registry,
    reset_registry,
    set_registry,
)
from memreg.core.bootstrap import (
    BootstrapSpec,
    EntrySpec,
    bootstrap_registry,
    load_bootstrap_file,
    load_bootstrap_spec,
)

__all__ = [
    "__version__",
    # Store
    "MemoryRegistry",
    "get_registry",
    "set_registry",
    "reset_registry",
    # Locks
    "LockFlag",
    "LockLedger",
    # Protocols
    "ReadableRegistry",
    "Registry",
    # Values
    "Value",
    "ValueKind",
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
    # Bootstrap
    "BootstrapSpec",
    "EntrySpec",
    "bootstrap_registry",
    "load_bootstrap_file",
    "load_bootstrap_spec",
]
