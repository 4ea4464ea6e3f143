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

"""Pytest fixtures for unit tests."""

import logging

import pytest

from memreg.core.registry import MemoryRegistry, reset_registry


@pytest.fixture(autouse=True)
def isolate_default_registry(monkeypatch):
    """Start every test without a default registry or MEMREG_* environment."""
    for name in (
        "MEMREG_THREAD_SAFE",
        "MEMREG_BOOTSTRAP_FILE",
        "MEMREG_FREEZE_AFTER_BOOTSTRAP",
        "MEMREG_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_registry()
    yield
    reset_registry()


@pytest.fixture(autouse=True)
def reset_memreg_logger():
    """Reset the memreg logger so caplog sees its records.

    configure_logging() changes the level of the package logger; restore it
    after each test.
    """
    logger = logging.getLogger("memreg")
    original_level = logger.level
    original_propagate = logger.propagate

    logger.propagate = True
    logger.setLevel(logging.DEBUG)

    yield

    logger.level = original_level
    logger.propagate = original_propagate


@pytest.fixture
def registry():
    """A fresh, unsynchronized registry."""
    return MemoryRegistry()


@pytest.fixture
def frozen_registry():
    """A registry holding one scalar and one array key, already frozen."""
    r = MemoryRegistry()
    r.set("foo", "bar")
    r.define("arr", array=True)
    r.assign("arr", "x", 1)
    r.freeze()
    return r
