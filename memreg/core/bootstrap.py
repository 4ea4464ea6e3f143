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

"""Declarative registry seeding from YAML or plain mappings.

Hosts usually define a fixed set of keys at boot, lock them and freeze. This
module lets that phase be written as data instead of call sequences.

Schema Structure:
    ```yaml
    version: "1.0"
    freeze: true

    entries:
      - key: app.name
        value: demo
        lock: READONLY

      - key: plugins
        array: true
        lock: [NO_SET, NO_CLEAR]

      - key: limits
        value:
          max_workers: 8
          timeout: 2.5
        lock: READ_MODIFY
    ```

Entries with a value are applied with set(); entries without one are applied
with define(). The document is only read, never written back.

Example:
    from memreg import MemoryRegistry
    from memreg.core.bootstrap import bootstrap_registry, load_bootstrap_file

    spec = load_bootstrap_file("registry.yaml")
    registry = bootstrap_registry(MemoryRegistry(), spec)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from memreg.core.errors import BootstrapLoadError
from memreg.core.locks import LockFlag
from memreg.core.values import Value, ValueKind, kind_of

if TYPE_CHECKING:
    from memreg.core.protocols import Registry

logger = logging.getLogger(__name__)


class EntrySpec(BaseModel):
    """A single key to seed.

    Attributes:
        key: Registry key.
        value: Initial value; scalar or flat array.
        lock: Lock mask as a name, ``|``-joined names, a list of names or an int.
        array: Define the key as an empty array when no value is given.
    """

    key: str = Field(..., description="Registry key")
    value: Any = Field(default=None, description="Initial scalar or flat array value")
    lock: int = Field(default=int(LockFlag.READ_WRITE), description="Lock mask")
    array: bool = Field(default=False, description="Define as an empty array")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Validate key is non-empty."""
        if not v or not v.strip():
            raise ValueError("Registry key cannot be empty")
        return v.strip()

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: Any) -> Any:
        """Validate value is a scalar or a flat array of scalars."""
        if kind_of(v) is None:
            raise ValueError(f"Unsupported value of type {type(v).__name__}")
        return v

    @field_validator("lock", mode="before")
    @classmethod
    def parse_lock(cls, v: Any) -> int:
        """Accept lock names as well as integer masks."""
        if v is None:
            return int(LockFlag.READ_WRITE)
        return int(LockFlag.parse(v))

    @model_validator(mode="after")
    def validate_array_value(self) -> "EntrySpec":
        """An array entry cannot carry a scalar value."""
        if self.array and self.value is not None and kind_of(self.value) is not ValueKind.ARRAY:
            raise ValueError(f"Entry '{self.key}' is marked as array but has a scalar value")
        return self

    @property
    def mask(self) -> LockFlag:
        return LockFlag(self.lock)


class BootstrapSpec(BaseModel):
    """Complete bootstrap document."""

    version: str = Field(default="1.0", description="Schema version")
    freeze: bool = Field(default=False, description="Freeze the registry after seeding")
    entries: List[EntrySpec] = Field(default_factory=list, description="Keys to seed")

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "BootstrapSpec":
        seen: set[str] = set()
        duplicates = []
        for entry in self.entries:
            if entry.key in seen:
                duplicates.append(entry.key)
            seen.add(entry.key)
        if duplicates:
            raise ValueError(f"Duplicate registry keys: {', '.join(sorted(set(duplicates)))}")
        return self


def load_bootstrap_spec(data: Dict[str, Any], source: Union[str, Path] = "<mapping>") -> BootstrapSpec:
    """Validate a parsed bootstrap document.

    Raises:
        BootstrapLoadError: If the document does not match the schema.
    """
    try:
        return BootstrapSpec.model_validate(data)
    except ValidationError as e:
        raise BootstrapLoadError(Path(source), f"Validation error: {e}", cause=e)


def load_bootstrap_file(path: Union[str, Path]) -> BootstrapSpec:
    """Load and validate a bootstrap YAML file.

    Raises:
        BootstrapLoadError: If the file is missing, empty, not valid YAML, or
            does not match the schema.
    """
    yaml_path = Path(path)
    try:
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise BootstrapLoadError(yaml_path, f"Cannot read file: {e}", cause=e)
    except yaml.YAMLError as e:
        raise BootstrapLoadError(yaml_path, f"YAML parsing error: {e}", cause=e)

    if data is None:
        raise BootstrapLoadError(yaml_path, "Empty YAML file")
    if not isinstance(data, dict):
        raise BootstrapLoadError(yaml_path, "Top-level YAML node must be a mapping")

    spec = load_bootstrap_spec(data, source=yaml_path)
    logger.debug(f"Loaded bootstrap spec from {yaml_path} ({len(spec.entries)} entries)")
    return spec


def bootstrap_registry(registry: "Registry", spec: BootstrapSpec) -> "Registry":
    """Apply a bootstrap spec to a registry.

    Registry errors (frozen, already defined, locked) propagate unchanged and
    leave the entries applied so far in place.
    """
    for entry in spec.entries:
        value: Value = entry.value
        if value is None:
            registry.define(entry.key, entry.mask, array=entry.array)
        else:
            registry.set(entry.key, value, entry.mask)
        logger.debug(f"Bootstrap: seeded '{entry.key}'")

    if spec.freeze:
        registry.freeze()
    return registry


__all__ = [
    "EntrySpec",
    "BootstrapSpec",
    "load_bootstrap_spec",
    "load_bootstrap_file",
    "bootstrap_registry",
]
