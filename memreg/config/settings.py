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

"""Configuration for the process-wide registry.

Settings are read from MEMREG_* environment variables and an optional .env
file:

    MEMREG_THREAD_SAFE=true
    MEMREG_BOOTSTRAP_FILE=/etc/app/registry.yaml
    MEMREG_FREEZE_AFTER_BOOTSTRAP=false
    MEMREG_LOG_LEVEL=debug
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from memreg.config.log_config import LEVEL_NAMES


class RegistrySettings(BaseSettings):
    """Settings used by get_registry() to build the default registry."""

    model_config = SettingsConfigDict(
        env_prefix="MEMREG_",
        env_file=".env" if not os.getenv("MEMREG_SKIP_ENV_FILE") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Serialize every registry operation behind one re-entrant lock
    thread_safe: bool = False

    # Bootstrap
    bootstrap_file: Optional[Path] = None
    freeze_after_bootstrap: bool = Field(
        default=True,
        description="Freeze after applying bootstrap_file even if the file does not ask to",
    )

    # Logging
    log_level: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        level = v.strip().upper()
        if level not in LEVEL_NAMES:
            raise ValueError(f"log_level must be one of {', '.join(LEVEL_NAMES)}, got {v!r}")
        return level


def get_settings() -> RegistrySettings:
    """Load settings from the current environment."""
    return RegistrySettings()
