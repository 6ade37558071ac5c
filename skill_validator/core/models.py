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
Data models for skill packages and validation findings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationMode(str, Enum):
    """Strictness policy for a validation call."""

    INTERACTIVE = "interactive"
    AUTOMATED = "automated"

    @classmethod
    def parse(cls, value: str | ValidationMode) -> ValidationMode:
        """Parse a mode name, accepting the ``web``/``agent`` aliases.

        Raises:
            ValueError: If the name is not a known mode or alias
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        aliases = {"web": cls.INTERACTIVE, "agent": cls.AUTOMATED}
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


class FindingLevel(str, Enum):
    """Whether a finding blocks the submission."""

    ERROR = "error"
    WARNING = "warning"


class FindingCode:
    """Stable machine-readable finding codes."""

    # Terminal
    ZIP_TOO_LARGE = "ZIP_TOO_LARGE"
    INVALID_ZIP = "INVALID_ZIP"
    EMPTY_ZIP = "EMPTY_ZIP"
    TOO_MANY_FILES = "TOO_MANY_FILES"
    UNCOMPRESSED_TOO_LARGE = "UNCOMPRESSED_TOO_LARGE"
    MISSING_MANIFEST = "MISSING_MANIFEST"
    MANIFEST_UNREADABLE = "MANIFEST_UNREADABLE"
    INVALID_FRONTMATTER = "INVALID_FRONTMATTER"
    INVALID_YAML = "INVALID_YAML"
    UNEXPECTED = "UNEXPECTED"

    # Accumulating
    MISSING_REQUIRED_FIELDS = "MISSING_REQUIRED_FIELDS"
    INVALID_VERSION = "INVALID_VERSION"
    DESCRIPTION_TOO_LONG = "DESCRIPTION_TOO_LONG"
    SUSPICIOUS_BINARY = "SUSPICIOUS_BINARY"
    SECRET_DETECTED = "SECRET_DETECTED"
    PATH_TRAVERSAL = "PATH_TRAVERSAL"
    SYMLINK_ENTRY = "SYMLINK_ENTRY"

    # Warnings
    FORBIDDEN_PATH = "FORBIDDEN_PATH"
    NAME_MISMATCH = "NAME_MISMATCH"
    MISSING_README = "MISSING_README"

    # Codes an interactive front end must treat as hard blockers
    SECURITY_CODES = frozenset({SUSPICIOUS_BINARY, SECRET_DETECTED, PATH_TRAVERSAL, SYMLINK_ENTRY})


@dataclass(frozen=True)
class Finding:
    """A single error or warning reported for a package."""

    level: FindingLevel
    code: str
    message: str
    file_path: str | None = None
    line_number: int | None = None

    @classmethod
    def error(cls, code: str, message: str, file_path: str | None = None, line_number: int | None = None) -> Finding:
        return cls(FindingLevel.ERROR, code, message, file_path, line_number)

    @classmethod
    def warning(cls, code: str, message: str, file_path: str | None = None, line_number: int | None = None) -> Finding:
        return cls(FindingLevel.WARNING, code, message, file_path, line_number)

    @property
    def is_error(self) -> bool:
        return self.level == FindingLevel.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to dictionary."""
        data: dict[str, Any] = {
            "type": self.level.value,
            "code": self.code,
            "message": self.message,
        }
        if self.file_path is not None:
            data["file"] = self.file_path
        if self.line_number is not None:
            data["line"] = self.line_number
        return data


@dataclass(frozen=True)
class PlatformRecord:
    """One ``tested_on`` entry from the manifest."""

    platform: str | None = None
    node: str | None = None
    openclaw: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = {k: v for k, v in (("platform", self.platform), ("node", self.node), ("openclaw", self.openclaw)) if v}
        data.update(self.extra)
        return data


@dataclass(frozen=True)
class Requirements:
    """Binary and package dependency hints."""

    bins: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()


@dataclass(frozen=True)
class ManifestConfig:
    """The nested ``metadata`` block of a manifest.

    ``emoji`` and ``requires`` are read from the ``metadata.openclaw``
    namespace. ``raw`` keeps the whole block exactly as written so that
    keys this class does not model are never lost.
    """

    emoji: str | None = None
    requires: Requirements | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Manifest:
    """Parsed YAML frontmatter from SKILL.md.

    Only built when ``name``, ``version`` and ``description`` are all present.
    Optional fields that are unset or empty are ``None``, never ``""``.
    """

    name: str
    version: str
    description: str
    author: str | None = None
    license: str | None = None
    homepage: str | None = None
    tested_on: tuple[PlatformRecord, ...] | None = None
    metadata: ManifestConfig | None = None
    body: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert manifest to dictionary (frontmatter keys, body excluded)."""
        data: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "description": self.description,
        }
        for key in ("author", "license", "homepage"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.tested_on is not None:
            data["tested_on"] = [record.to_dict() for record in self.tested_on]
        if self.metadata is not None:
            data["metadata"] = self.metadata.raw
        if self.extra:
            data["extra"] = self.extra
        return data


@dataclass(frozen=True)
class ValidationStats:
    """File counts and detected conventional directories."""

    file_count: int = 0
    total_size: int = 0
    has_scripts: bool = False
    has_config: bool = False
    has_assets: bool = False
    has_references: bool = False

    @classmethod
    def empty(cls) -> ValidationStats:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_count": self.file_count,
            "total_size": self.total_size,
            "has_scripts": self.has_scripts,
            "has_config": self.has_config,
            "has_assets": self.has_assets,
            "has_references": self.has_references,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one package."""

    valid: bool
    errors: tuple[Finding, ...] = ()
    warnings: tuple[Finding, ...] = ()
    manifest: Manifest | None = None
    stats: ValidationStats = field(default_factory=ValidationStats)

    @classmethod
    def from_findings(
        cls,
        findings: list[Finding],
        manifest: Manifest | None = None,
        stats: ValidationStats | None = None,
    ) -> ValidationResult:
        """Split findings by level, preserving insertion order."""
        errors = tuple(f for f in findings if f.is_error)
        warnings = tuple(f for f in findings if not f.is_error)
        return cls(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            manifest=manifest,
            stats=stats or ValidationStats.empty(),
        )

    @property
    def error_codes(self) -> list[str]:
        return [f.code for f in self.errors]

    @property
    def warning_codes(self) -> list[str]:
        return [f.code for f in self.warnings]

    @property
    def security_errors(self) -> list[Finding]:
        """Errors that block a submission regardless of mode."""
        return [f for f in self.errors if f.code in FindingCode.SECURITY_CODES]

    def to_dict(self) -> dict[str, Any]:
        """Convert validation result to dictionary."""
        return {
            "valid": self.valid,
            "errors": [f.to_dict() for f in self.errors],
            "warnings": [f.to_dict() for f in self.warnings],
            "manifest": self.manifest.to_dict() if self.manifest else None,
            "stats": self.stats.to_dict(),
        }
