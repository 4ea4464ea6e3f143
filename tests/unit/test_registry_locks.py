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

"""Tests for lock flags and the lock ledger."""

import logging

import pytest

from memreg.core.errors import FrozenError, LockedError, RegistryErrorReason
from memreg.core.locks import LockFlag, LockLedger


class TestLockFlag:
    """Tests for LockFlag values and parsing."""

    def test_flags_are_distinct_bits(self):
        """Each single flag occupies its own bit."""
        flags = [
            LockFlag.NO_SET,
            LockFlag.NO_APPEND,
            LockFlag.NO_PREPEND,
            LockFlag.NO_ASSIGN,
            LockFlag.NO_UNASSIGN,
            LockFlag.NO_CLEAR,
        ]
        assert [int(f) for f in flags] == [1, 2, 4, 8, 16, 32]
        assert int(LockFlag.READ_WRITE) == 0

    def test_presets_compose_flags(self):
        """Presets are unions of the single flags."""
        assert LockFlag.READONLY == (
            LockFlag.NO_SET
            | LockFlag.NO_APPEND
            | LockFlag.NO_PREPEND
            | LockFlag.NO_ASSIGN
            | LockFlag.NO_UNASSIGN
            | LockFlag.NO_CLEAR
        )
        assert LockFlag.READ_MODIFY == LockFlag.NO_SET | LockFlag.NO_CLEAR

    def test_parse_passes_flags_through(self):
        assert LockFlag.parse(LockFlag.NO_SET) is LockFlag.NO_SET

    def test_parse_int(self):
        assert LockFlag.parse(33) == LockFlag.NO_SET | LockFlag.NO_CLEAR
        assert LockFlag.parse(0) == LockFlag.READ_WRITE

    def test_parse_names(self):
        """Names are case-insensitive and may be joined with a pipe."""
        assert LockFlag.parse("readonly") == LockFlag.READONLY
        assert LockFlag.parse("NO_SET | no_clear") == LockFlag.READ_MODIFY
        assert LockFlag.parse(["NO_ASSIGN", "NO_UNASSIGN"]) == (
            LockFlag.NO_ASSIGN | LockFlag.NO_UNASSIGN
        )
        assert LockFlag.parse("") == LockFlag.READ_WRITE

    def test_parse_iterable_of_flags_and_ints(self):
        assert LockFlag.parse([LockFlag.NO_SET, LockFlag.NO_CLEAR]) == LockFlag.READ_MODIFY
        assert LockFlag.parse([8, "NO_UNASSIGN"]) == LockFlag.NO_ASSIGN | LockFlag.NO_UNASSIGN
        with pytest.raises(ValueError, match="Invalid lock mask"):
            LockFlag.parse([LockFlag.NO_SET, 64])

    def test_parse_rejects_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown lock flag"):
            LockFlag.parse("NO_READ")

    @pytest.mark.parametrize("bad", [-1, 64, 65, True])
    def test_parse_rejects_invalid_ints(self, bad):
        with pytest.raises(ValueError, match="Invalid lock mask"):
            LockFlag.parse(bad)


class TestLockLedger:
    """Tests for LockLedger bookkeeping."""

    def setup_method(self):
        """Create a fresh ledger for each test."""
        self.ledger = LockLedger()

    def test_unknown_key_is_read_write(self):
        assert self.ledger.mask("missing") == LockFlag.READ_WRITE
        assert self.ledger.check("missing", LockFlag.NO_SET) is False

    def test_check_without_flags_is_false(self):
        """Nothing can be locked when no flags are asked about."""
        self.ledger.lock("k", LockFlag.READONLY)
        assert self.ledger.check("k") is False

    def test_check_any_of_flags(self):
        self.ledger.lock("k", LockFlag.NO_ASSIGN)

        assert self.ledger.check("k", LockFlag.NO_ASSIGN) is True
        assert self.ledger.check("k", LockFlag.NO_SET, LockFlag.NO_ASSIGN) is True
        assert self.ledger.check("k", LockFlag.NO_SET, LockFlag.NO_CLEAR) is False

    def test_check_accepts_names(self):
        self.ledger.lock("k", "READ_MODIFY")
        assert self.ledger.check("k", "NO_CLEAR") is True
        assert self.ledger.check("k", "NO_APPEND") is False

    def test_lock_overwrites_mask(self):
        self.ledger.lock("k", LockFlag.NO_SET)
        self.ledger.lock("k", LockFlag.NO_CLEAR)

        assert self.ledger.mask("k") == LockFlag.NO_CLEAR
        assert self.ledger.check("k", LockFlag.NO_SET) is False

    def test_unlock_removes_mask(self):
        self.ledger.lock("k", LockFlag.READONLY)
        self.ledger.unlock("k")

        assert self.ledger.mask("k") == LockFlag.READ_WRITE
        # Unlocking an unknown key is a no-op
        self.ledger.unlock("k")
        self.ledger.unlock("never-locked")

    def test_freeze_is_one_way_and_idempotent(self):
        assert self.ledger.is_frozen() is False

        self.ledger.freeze()
        self.ledger.freeze()

        assert self.ledger.is_frozen() is True

    def test_freeze_logs_once(self, caplog):
        with caplog.at_level(logging.INFO, logger="memreg"):
            self.ledger.freeze()
            self.ledger.freeze()

        frozen_records = [r for r in caplog.records if "frozen" in r.getMessage()]
        assert len(frozen_records) == 1

    def test_assert_not_frozen(self):
        self.ledger.assert_not_frozen("set", "k")

        self.ledger.freeze()
        with pytest.raises(FrozenError) as exc_info:
            self.ledger.assert_not_frozen("set", "k")

        assert exc_info.value.action == "set"
        assert exc_info.value.key == "k"
        assert exc_info.value.reason is RegistryErrorReason.FROZEN
        assert str(exc_info.value) == "Registry action `set` failed for k: registry is frozen"

    def test_assert_not_locked(self):
        self.ledger.lock("k", LockFlag.READ_MODIFY)
        self.ledger.assert_not_locked("append", "k", LockFlag.NO_APPEND)

        with pytest.raises(LockedError) as exc_info:
            self.ledger.assert_not_locked("clear", "k", LockFlag.NO_CLEAR)

        assert exc_info.value.flags == LockFlag.NO_CLEAR
        assert exc_info.value.details["flags"] == "NO_CLEAR"
        assert "value is locked for this action" in str(exc_info.value)

    def test_assert_not_locked_without_flags_passes(self):
        self.ledger.lock("k", LockFlag.READONLY)
        self.ledger.assert_not_locked("set", "k")
