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

"""Lock bookkeeping for the memory registry.

The ledger stores per-key lock bitmasks and the global frozen flag. It knows
nothing about stored values; the registry consults it before every write.

Example:
    ledger = LockLedger()
    ledger.lock("plugins", LockFlag.READ_MODIFY)

    ledger.check("plugins", LockFlag.NO_SET)     # True
    ledger.check("plugins", LockFlag.NO_APPEND)  # False

    ledger.freeze()
    ledger.assert_not_frozen("set", "plugins")   # raises FrozenError
"""

from __future__ import annotations

import logging
from enum import IntFlag
from functools import reduce
from typing import Dict, Iterable, Union

from memreg.core.errors import FrozenError, LockedError

logger = logging.getLogger(__name__)

LockSpec = Union["LockFlag", int, str, Iterable[str]]


class LockFlag(IntFlag):
    """Operations a key can be locked against.

    Values:
        READ_WRITE: No restrictions
        NO_SET: Prevents overwriting the key via set()
        NO_APPEND: Prevents append()
        NO_PREPEND: Prevents prepend()
        NO_ASSIGN: Prevents assign()
        NO_UNASSIGN: Prevents unassign()
        NO_CLEAR: Prevents clear()
        READONLY: Every flag above
        READ_MODIFY: Allows list/map edits, forbids replacing or clearing the key
    """

    READ_WRITE = 0
    NO_SET = 1
    NO_APPEND = 2
    NO_PREPEND = 4
    NO_ASSIGN = 8
    NO_UNASSIGN = 16
    NO_CLEAR = 32

    READONLY = NO_SET | NO_APPEND | NO_PREPEND | NO_ASSIGN | NO_UNASSIGN | NO_CLEAR
    READ_MODIFY = NO_SET | NO_CLEAR

    @classmethod
    def parse(cls, spec: LockSpec) -> "LockFlag":
        """Build a mask from a flag, an int, a name or several names.

        Names are case-insensitive and may be joined with ``|``:

            LockFlag.parse("readonly")
            LockFlag.parse("NO_SET|NO_CLEAR")
            LockFlag.parse(["NO_ASSIGN", "NO_UNASSIGN"])

        Raises:
            ValueError: If a name is unknown or the int carries unknown bits
        """
        if isinstance(spec, cls):
            return spec
        if isinstance(spec, bool):
            raise ValueError(f"Invalid lock mask: {spec!r}")
        if isinstance(spec, int):
            if spec < 0 or spec & ~int(cls.READONLY):
                raise ValueError(f"Invalid lock mask: {spec}")
            return cls(spec)
        flags = []
        if isinstance(spec, str):
            names = [part.strip() for part in spec.split("|")]
        else:
            names = []
            for part in spec:
                if isinstance(part, int):
                    flags.append(cls.parse(part))
                else:
                    names.append(str(part).strip())

        for name in names:
            if not name:
                continue
            member = cls.__members__.get(name.upper())
            if member is None:
                raise ValueError(
                    f"Unknown lock flag: {name}. "
                    f"Valid flags: {', '.join(cls.__members__)}"
                )
            flags.append(member)
        return reduce(lambda a, b: a | b, flags, cls.READ_WRITE)


class LockLedger:
    """Per-key lock masks plus the one-way frozen flag.

    Keys without a recorded mask are read-write. The frozen flag can only be
    raised; nothing lowers it again.
    """

    def __init__(self) -> None:
        self._masks: Dict[str, LockFlag] = {}
        self._frozen = False

    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Disallow every further mutation. Idempotent."""
        if not self._frozen:
            self._frozen = True
            logger.info("Registry frozen with %d locked key(s)", len(self._masks))

    def check(self, key: str, *flags: LockSpec) -> bool:
        """Return True if the key's mask includes any of the given flags.

        With no flags given, nothing can be locked and False is returned.
        """
        if not flags:
            return False
        return bool(self.mask(key) & _combine(flags))

    def mask(self, key: str) -> LockFlag:
        """Get the key's recorded mask, READ_WRITE if none."""
        return self._masks.get(key, LockFlag.READ_WRITE)

    def lock(self, key: str, mask: LockSpec) -> None:
        """Set (overwrite) the lock mask for a key."""
        self._masks[key] = LockFlag.parse(mask)

    def unlock(self, key: str) -> None:
        """Remove lock state for a key."""
        self._masks.pop(key, None)

    def assert_not_frozen(self, action: str, key: str) -> None:
        """Raise FrozenError if the registry is frozen."""
        if self._frozen:
            raise FrozenError(action, key)

    def assert_not_locked(self, action: str, key: str, *flags: LockSpec) -> None:
        """Raise LockedError if the key is locked against any of the flags."""
        if self.check(key, *flags):
            raise LockedError(action, key, self.mask(key) & _combine(flags))


def _combine(flags: Iterable[LockSpec]) -> LockFlag:
    return reduce(lambda a, b: a | LockFlag.parse(b), flags, LockFlag.READ_WRITE)


__all__ = [
    "LockFlag",
    "LockLedger",
    "LockSpec",
]
