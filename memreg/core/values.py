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

"""Value model for registry entries.

A registry value is one of:
- a scalar: None, bool, int, float or str
- an array: one level of string subkeys mapping to scalars

Arrays come in two shapes. A list holds sequential subkeys "0".."n-1" and is
what define(array=True), append() and prepend() produce. A dict holds any
other subkey set in insertion order. Subkey "2" addresses index 2 of a list.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

Scalar = Union[None, bool, int, float, str]
ArrayValue = Union[List[Scalar], Dict[str, Scalar]]
Value = Union[Scalar, ArrayValue]


class ValueKind(Enum):
    """Tag of a registry value."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"

    @property
    def is_scalar(self) -> bool:
        return self is not ValueKind.ARRAY


def _scalar_kind(value: Any) -> Optional[ValueKind]:
    # bool before int: True is an int too
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    return None


def kind_of(value: Any) -> Optional[ValueKind]:
    """Classify a value, or return None if it cannot be stored.

    Nested containers, non-string mapping keys and arbitrary objects are not
    representable.
    """
    kind = _scalar_kind(value)
    if kind is not None:
        return kind
    if isinstance(value, list):
        if all(_scalar_kind(item) is not None for item in value):
            return ValueKind.ARRAY
        return None
    if isinstance(value, dict):
        if all(
            isinstance(sub, str) and _scalar_kind(item) is not None
            for sub, item in value.items()
        ):
            return ValueKind.ARRAY
        return None
    return None


def is_array(value: Any) -> bool:
    return kind_of(value) is ValueKind.ARRAY


def copy_value(value: Value) -> Value:
    """Shallow copy arrays; scalars are immutable and returned as is."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


def list_index(subkey: str) -> Optional[int]:
    """Return the list index a subkey addresses, if it is a canonical index.

    "0", "7" and "12" are indexes; "-1", "01", "x" and "" are not.
    """
    if not (subkey.isascii() and subkey.isdigit()):
        return None
    if len(subkey) > 1 and subkey.startswith("0"):
        return None
    return int(subkey)


def as_list(array: ArrayValue) -> Optional[List[Scalar]]:
    """Get the list-like view of an array, or None if it has none.

    A dict qualifies only when its keys are exactly "0".."n-1" in order.
    """
    if isinstance(array, list):
        return list(array)
    if list(array) == [str(i) for i in range(len(array))]:
        return list(array.values())
    return None


def _to_dict(items: List[Scalar]) -> Dict[str, Scalar]:
    return {str(i): item for i, item in enumerate(items)}


def has_subkey(array: ArrayValue, subkey: str) -> bool:
    if isinstance(array, list):
        index = list_index(subkey)
        return index is not None and index < len(array)
    return subkey in array


def assign_subkey(array: ArrayValue, subkey: str, value: Scalar) -> ArrayValue:
    """Set subkey -> value, returning the resulting array.

    Lists stay lists when the subkey overwrites an index or extends the end;
    any other subkey turns the list into a dict.
    """
    if isinstance(array, list):
        index = list_index(subkey)
        if index is not None and index < len(array):
            array[index] = value
            return array
        if index == len(array):
            array.append(value)
            return array
        array = _to_dict(array)
    array[subkey] = value
    return array


def unassign_subkey(array: ArrayValue, subkey: str) -> ArrayValue:
    """Remove subkey if present, returning the resulting array.

    Removing the last list element keeps a list; removing any other element
    leaves a gap, so the list becomes a dict without that subkey.
    """
    if not has_subkey(array, subkey):
        return array
    if isinstance(array, list):
        if list_index(subkey) == len(array) - 1:
            array.pop()
            return array
        array = _to_dict(array)
    del array[subkey]
    return array


__all__ = [
    "Scalar",
    "ArrayValue",
    "Value",
    "ValueKind",
    "kind_of",
    "is_array",
    "copy_value",
    "list_index",
    "as_list",
    "has_subkey",
    "assign_subkey",
    "unassign_subkey",
]
