# Copyright 2026 Cisco Systems, Inc.
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
#
# SPDX-License-Identifier: Apache-2.0

"""
Configuration class for Skill Validator.

Values left as ``None`` are filled from ``SKILL_VALIDATOR_*`` environment
variables, then from the built-in defaults in :class:`SkillValidatorConstants`.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from ..core.exceptions import ConfigurationError
from ..core.limits import ValidationLimits
from ..core.models import ValidationMode
from .constants import SkillValidatorConstants as C

logger = logging.getLogger(__name__)


def _positive_int(name: str, value: object) -> int:
    """Coerce *value* to a positive int, naming *name* in the error."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if number <= 0:
        raise ConfigurationError(f"{name} must be positive, got {number}")
    return number


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return _positive_int(name, raw)


def _parse_mode(name: str, value: object) -> ValidationMode:
    try:
        return ValidationMode.parse(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be 'interactive' or 'automated', got {value!r}")


@dataclass
class Config:
    """
    Configuration for Skill Validator.
    """

    # Size & count ceilings
    max_zip_size_mb: int | None = None
    max_uncompressed_size_mb: int | None = None
    max_files: int | None = None
    max_description_length: int | None = None

    # Mode used when a caller does not pick one
    default_mode: ValidationMode | None = None

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.max_zip_size_mb is None:
            self.max_zip_size_mb = _int_from_env(C.ENV_MAX_ZIP_SIZE_MB, C.DEFAULT_MAX_ZIP_SIZE_MB)
        else:
            self.max_zip_size_mb = _positive_int("max_zip_size_mb", self.max_zip_size_mb)

        if self.max_uncompressed_size_mb is None:
            self.max_uncompressed_size_mb = _int_from_env(
                C.ENV_MAX_UNCOMPRESSED_SIZE_MB, C.DEFAULT_MAX_UNCOMPRESSED_SIZE_MB
            )
        else:
            self.max_uncompressed_size_mb = _positive_int("max_uncompressed_size_mb", self.max_uncompressed_size_mb)

        if self.max_files is None:
            self.max_files = _int_from_env(C.ENV_MAX_FILES, C.DEFAULT_MAX_FILES)
        else:
            self.max_files = _positive_int("max_files", self.max_files)

        if self.max_description_length is None:
            self.max_description_length = _int_from_env(C.ENV_MAX_DESCRIPTION_LENGTH, C.DEFAULT_MAX_DESCRIPTION_LENGTH)
        else:
            self.max_description_length = _positive_int("max_description_length", self.max_description_length)

        if self.default_mode is None:
            self.default_mode = _parse_mode(C.ENV_DEFAULT_MODE, os.getenv(C.ENV_DEFAULT_MODE) or C.DEFAULT_MODE)
        else:
            self.default_mode = _parse_mode("default_mode", self.default_mode)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from .env file.

        Variables already present in the process environment are not
        overridden.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            for key, value in dotenv_values(config_file).items():
                if value is not None and key not in os.environ:
                    os.environ[key] = value
        else:
            logger.warning("Config file not found: %s", config_file)

        return cls.from_env()

    def to_limits(self) -> ValidationLimits:
        """Build the immutable ceilings consumed by the engine."""
        return ValidationLimits(
            max_zip_size_bytes=self.max_zip_size_mb * C.MIB,
            max_uncompressed_size_bytes=self.max_uncompressed_size_mb * C.MIB,
            max_file_count=self.max_files,
            max_description_length=self.max_description_length,
        )
