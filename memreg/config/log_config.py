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

"""Logging level configuration for memreg loggers.

Logging Levels (memreg convention):
- DEBUG (10): Key lifecycle (define, clear) and bootstrap steps
- INFO (20): Freeze and default registry creation
- WARNING (30) and above: unused; failures are raised, not logged
"""

import logging

ROOT_LOGGER = "memreg"

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(log_level: str) -> int:
    """Map a level name to its numeric value; unknown names map to INFO."""
    level_upper = log_level.strip().upper()
    if level_upper not in LEVEL_NAMES:
        return logging.INFO
    return getattr(logging, level_upper)


def configure_logging(log_level: str = "INFO") -> None:
    """Set the level of every memreg logger.

    Handlers are left to the host application.
    """
    logging.getLogger(ROOT_LOGGER).setLevel(resolve_level(log_level))
