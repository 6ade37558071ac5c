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

"""Tests for result and manifest data models."""

import pytest

from skill_validator.core.models import (
    Finding,
    FindingCode,
    FindingLevel,
    Manifest,
    ManifestConfig,
    PlatformRecord,
    ValidationMode,
    ValidationResult,
    ValidationStats,
)


class TestValidationMode:
    """Test mode parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("interactive", ValidationMode.INTERACTIVE),
            ("automated", ValidationMode.AUTOMATED),
            ("web", ValidationMode.INTERACTIVE),
            ("agent", ValidationMode.AUTOMATED),
            ("  Automated ", ValidationMode.AUTOMATED),
            (ValidationMode.AUTOMATED, ValidationMode.AUTOMATED),
        ],
    )
    def test_parse(self, raw, expected):
        assert ValidationMode.parse(raw) is expected

    def test_parse_unknown_mode_raises(self):
        with pytest.raises(ValueError):
            ValidationMode.parse("strict")


class TestFinding:
    """Test Finding construction and serialization."""

    def test_error_and_warning_constructors(self):
        error = Finding.error(FindingCode.INVALID_ZIP, "bad")
        warning = Finding.warning(FindingCode.MISSING_README, "no readme")

        assert error.level == FindingLevel.ERROR
        assert error.is_error
        assert warning.level == FindingLevel.WARNING
        assert not warning.is_error

    def test_to_dict_omits_unset_location(self):
        data = Finding.error(FindingCode.EMPTY_ZIP, "The ZIP archive is empty").to_dict()
        assert data == {"type": "error", "code": "EMPTY_ZIP", "message": "The ZIP archive is empty"}

    def test_to_dict_includes_location(self):
        data = Finding.error(FindingCode.SECRET_DETECTED, "secret", "config.json", 3).to_dict()
        assert data["file"] == "config.json"
        assert data["line"] == 3


class TestManifest:
    """Test Manifest serialization."""

    def test_to_dict_minimal(self):
        manifest = Manifest(name="demo", version="1.0.0", description="x")
        assert manifest.to_dict() == {"name": "demo", "version": "1.0.0", "description": "x"}

    def test_to_dict_optional_fields(self):
        manifest = Manifest(
            name="demo",
            version="1.0.0",
            description="x",
            author="Jane",
            tested_on=(PlatformRecord(platform="macos", node="20"),),
            metadata=ManifestConfig(emoji="*", raw={"openclaw": {"emoji": "*"}}),
            extra={"tags": ["a"]},
        )
        data = manifest.to_dict()

        assert data["author"] == "Jane"
        assert "license" not in data
        assert data["tested_on"] == [{"platform": "macos", "node": "20"}]
        assert data["metadata"] == {"openclaw": {"emoji": "*"}}
        assert data["extra"] == {"tags": ["a"]}


class TestValidationResult:
    """Test result aggregation."""

    def test_from_findings_splits_by_level(self):
        findings = [
            Finding.warning(FindingCode.FORBIDDEN_PATH, "w1"),
            Finding.error(FindingCode.SUSPICIOUS_BINARY, "e1"),
            Finding.error(FindingCode.INVALID_VERSION, "e2"),
        ]
        result = ValidationResult.from_findings(findings)

        assert not result.valid
        assert result.error_codes == [FindingCode.SUSPICIOUS_BINARY, FindingCode.INVALID_VERSION]
        assert result.warning_codes == [FindingCode.FORBIDDEN_PATH]
        assert result.stats == ValidationStats()

    def test_warnings_never_affect_validity(self):
        result = ValidationResult.from_findings([Finding.warning(FindingCode.MISSING_README, "w")])
        assert result.valid

    def test_security_errors(self):
        result = ValidationResult.from_findings(
            [
                Finding.error(FindingCode.INVALID_VERSION, "v"),
                Finding.error(FindingCode.SECRET_DETECTED, "s"),
                Finding.error(FindingCode.SYMLINK_ENTRY, "l"),
            ]
        )
        assert [f.code for f in result.security_errors] == [FindingCode.SECRET_DETECTED, FindingCode.SYMLINK_ENTRY]

    def test_to_dict_shape(self):
        result = ValidationResult.from_findings([], stats=ValidationStats(file_count=2, total_size=10))
        data = result.to_dict()

        assert data["valid"] is True
        assert data["errors"] == []
        assert data["manifest"] is None
        assert data["stats"]["file_count"] == 2
        assert data["stats"]["has_scripts"] is False
