# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Tests for configuration module.
"""

import os
from unittest.mock import patch

import pytest

from skill_validator.config.config import Config
from skill_validator.config.constants import SkillValidatorConstants
from skill_validator.core.exceptions import ConfigurationError
from skill_validator.core.limits import ValidationLimits
from skill_validator.core.models import ValidationMode


def _clean_env() -> dict:
    return {k: v for k, v in os.environ.items() if not k.startswith("SKILL_VALIDATOR_")}


class TestConfigInitialization:
    """Test Config class initialization."""

    def test_config_with_defaults(self):
        """Test config initialization with default values."""
        with patch.dict("os.environ", _clean_env(), clear=True):
            config = Config()

            assert config.max_zip_size_mb == 50
            assert config.max_uncompressed_size_mb == 200
            assert config.max_files == 500
            assert config.max_description_length == 1024
            assert config.default_mode == ValidationMode.INTERACTIVE

    def test_config_with_custom_values(self):
        """Test config with custom values."""
        config = Config(max_zip_size_mb=10, max_files=20, default_mode="agent")

        assert config.max_zip_size_mb == 10
        assert config.max_files == 20
        assert config.default_mode == ValidationMode.AUTOMATED

    def test_config_from_env_variables(self):
        """Test config loading from environment variables."""
        with patch.dict(
            "os.environ",
            {
                "SKILL_VALIDATOR_MAX_ZIP_SIZE_MB": "5",
                "SKILL_VALIDATOR_MAX_UNCOMPRESSED_SIZE_MB": "25",
                "SKILL_VALIDATOR_MAX_FILES": "100",
                "SKILL_VALIDATOR_MAX_DESCRIPTION_LENGTH": "300",
                "SKILL_VALIDATOR_DEFAULT_MODE": "automated",
            },
        ):
            config = Config.from_env()

            assert config.max_zip_size_mb == 5
            assert config.max_uncompressed_size_mb == 25
            assert config.max_files == 100
            assert config.max_description_length == 300
            assert config.default_mode == ValidationMode.AUTOMATED

    def test_explicit_values_win_over_env(self):
        with patch.dict("os.environ", {"SKILL_VALIDATOR_MAX_FILES": "100"}):
            assert Config(max_files=7).max_files == 7


class TestConfigErrors:
    """Test invalid configuration values."""

    @pytest.mark.parametrize("value", ["lots", "0", "-3"])
    def test_invalid_integer(self, value):
        with patch.dict("os.environ", {"SKILL_VALIDATOR_MAX_FILES": value}):
            with pytest.raises(ConfigurationError, match="SKILL_VALIDATOR_MAX_FILES"):
                Config.from_env()

    def test_invalid_mode(self):
        with patch.dict("os.environ", {"SKILL_VALIDATOR_DEFAULT_MODE": "strict"}):
            with pytest.raises(ConfigurationError, match="SKILL_VALIDATOR_DEFAULT_MODE"):
                Config.from_env()

    @pytest.mark.parametrize(
        "field, value",
        [
            ("max_files", 0),
            ("max_files", -1),
            ("max_zip_size_mb", "lots"),
            ("max_uncompressed_size_mb", 2.5),
            ("max_description_length", True),
        ],
    )
    def test_invalid_explicit_ceiling(self, field, value):
        with patch.dict("os.environ", _clean_env(), clear=True):
            with pytest.raises(ConfigurationError, match=field):
                Config(**{field: value})

    def test_invalid_explicit_mode(self):
        with patch.dict("os.environ", _clean_env(), clear=True):
            with pytest.raises(ConfigurationError, match="default_mode"):
                Config(default_mode="strict")

    def test_explicit_numeric_string_accepted(self):
        with patch.dict("os.environ", _clean_env(), clear=True):
            assert Config(max_files="12").max_files == 12


class TestConfigFromFile:
    """Test .env file loading."""

    def test_from_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SKILL_VALIDATOR_MAX_FILES=42\nSKILL_VALIDATOR_DEFAULT_MODE=agent\n")

        with patch.dict("os.environ", _clean_env(), clear=True):
            config = Config.from_file(env_file)

            assert config.max_files == 42
            assert config.default_mode == ValidationMode.AUTOMATED

    def test_from_file_does_not_override_environment(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SKILL_VALIDATOR_MAX_FILES=42\n")

        with patch.dict("os.environ", {**_clean_env(), "SKILL_VALIDATOR_MAX_FILES": "9"}, clear=True):
            assert Config.from_file(env_file).max_files == 9

    def test_missing_file_falls_back_to_env(self, tmp_path):
        with patch.dict("os.environ", _clean_env(), clear=True):
            config = Config.from_file(tmp_path / "absent.env")
            assert config.max_files == SkillValidatorConstants.DEFAULT_MAX_FILES


class TestToLimits:
    """Test conversion to engine limits."""

    def test_to_limits_converts_megabytes(self):
        limits = Config(max_zip_size_mb=2, max_uncompressed_size_mb=8, max_files=3, max_description_length=99).to_limits()

        assert limits.max_zip_size_bytes == 2 * 1024 * 1024
        assert limits.max_uncompressed_size_bytes == 8 * 1024 * 1024
        assert limits.max_file_count == 3
        assert limits.max_description_length == 99
        assert limits.manifest_filename == "SKILL.md"

    def test_default_limits_match_defaults(self):
        with patch.dict("os.environ", _clean_env(), clear=True):
            assert Config().to_limits() == ValidationLimits()
