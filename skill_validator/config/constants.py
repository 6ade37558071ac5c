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
Constants for Skill Validator.
"""

from .. import __version__ as PACKAGE_VERSION


class SkillValidatorConstants:
    """Constants used throughout the validator."""

    VERSION = PACKAGE_VERSION

    MIB = 1024 * 1024

    # Default ceilings
    DEFAULT_MAX_ZIP_SIZE_MB = 50
    DEFAULT_MAX_UNCOMPRESSED_SIZE_MB = 200
    DEFAULT_MAX_FILES = 500
    DEFAULT_MAX_DESCRIPTION_LENGTH = 1024

    # Package layout
    MANIFEST_FILENAME = "SKILL.md"
    README_FILENAMES = ("README.md", "README", "README.txt", "README.rst")
    REQUIRED_MANIFEST_FIELDS = ("name", "version", "description")

    # Conventional directories reported in ValidationStats
    SCRIPTS_DIR = "scripts/"
    CONFIG_DIR = "config/"
    ASSETS_DIR = "assets/"
    REFERENCES_DIR = "references/"

    # Validation modes
    MODE_INTERACTIVE = "interactive"
    MODE_AUTOMATED = "automated"
    DEFAULT_MODE = MODE_INTERACTIVE

    # Environment variables read by Config
    ENV_MAX_ZIP_SIZE_MB = "SKILL_VALIDATOR_MAX_ZIP_SIZE_MB"
    ENV_MAX_UNCOMPRESSED_SIZE_MB = "SKILL_VALIDATOR_MAX_UNCOMPRESSED_SIZE_MB"
    ENV_MAX_FILES = "SKILL_VALIDATOR_MAX_FILES"
    ENV_MAX_DESCRIPTION_LENGTH = "SKILL_VALIDATOR_MAX_DESCRIPTION_LENGTH"
    ENV_DEFAULT_MODE = "SKILL_VALIDATOR_DEFAULT_MODE"
