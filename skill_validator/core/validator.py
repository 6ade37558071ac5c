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
Validation engine for submitted skill package archives.

Pipeline: size guard -> archive open -> layout resolution -> manifest ->
security scan + feature detection -> aggregation. Terminal stages raise
:class:`ValidationAborted`; everything else accumulates findings.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..config.constants import SkillValidatorConstants as C
from .archive import SkillArchive
from .exceptions import ValidationAborted
from .features import detect_features
from .layout import resolve_root_prefix, root_name
from .limits import ValidationLimits
from .manifest import ManifestParser
from .models import Finding, FindingCode, Manifest, ValidationMode, ValidationResult, ValidationStats
from .security import SecurityScanner

logger = logging.getLogger(__name__)


class SkillValidator:
    """Validates skill package archives.

    Instances hold only immutable configuration, so one validator may be
    shared across threads and requests.

    Example:
        >>> validator = SkillValidator()
        >>> result = validator.validate(zip_bytes, ValidationMode.AUTOMATED)
        >>> result.valid
        True
    """

    def __init__(self, limits: ValidationLimits | None = None):
        """
        Initialize validator.

        Args:
            limits: Size and count ceilings. Defaults to 50 MB compressed,
                200 MB uncompressed, 500 files.
        """
        self.limits = limits or ValidationLimits()
        self.manifest_parser = ManifestParser(self.limits)
        self.security_scanner = SecurityScanner()

    def validate(
        self,
        buffer: bytes | bytearray | memoryview,
        mode: ValidationMode | str = ValidationMode.INTERACTIVE,
    ) -> ValidationResult:
        """
        Validate a package archive.

        Expected failures are reported as findings, never raised. Any other
        exception becomes a single UNEXPECTED error.

        Args:
            buffer: The ZIP archive bytes
            mode: Interactive (manifest optional) or Automated (manifest required)

        Returns:
            ValidationResult

        Raises:
            ValueError: If *mode* is not a known mode name
        """
        mode = ValidationMode.parse(mode)

        try:
            result = self._run(buffer, mode)
        except ValidationAborted as e:
            result = ValidationResult.from_findings([e.finding], stats=e.stats)
        except MemoryError:
            raise
        except Exception as e:
            logger.exception("Unexpected error during package validation")
            result = ValidationResult.from_findings(
                [Finding.error(FindingCode.UNEXPECTED, f"Unexpected validation error ({type(e).__name__}): {e}")]
            )

        logger.info(
            "Validated package (%s mode): valid=%s, %d error(s), %d warning(s)",
            mode.value,
            result.valid,
            len(result.errors),
            len(result.warnings),
        )
        return result

    def _run(self, buffer: bytes | bytearray | memoryview, mode: ValidationMode) -> ValidationResult:
        with SkillArchive.open(buffer, self.limits) as archive:
            stats = ValidationStats(file_count=len(archive.files), total_size=archive.total_uncompressed_size)
            root_prefix = resolve_root_prefix(archive)
            logger.debug("Resolved package root: %r", root_prefix)

            try:
                manifest, findings = self._load_manifest(archive, root_prefix, mode)
            except ValidationAborted as e:
                return ValidationResult.from_findings([e.finding], stats=stats)

            findings.extend(self.security_scanner.scan(archive.files, root_prefix))

            features = detect_features(archive.files, root_prefix)
            stats = replace(
                stats,
                has_scripts=features.has_scripts,
                has_config=features.has_config,
                has_assets=features.has_assets,
                has_references=features.has_references,
            )

            findings.extend(self._package_warnings(archive, root_prefix, manifest))

        return ValidationResult.from_findings(findings, manifest=manifest, stats=stats)

    def _load_manifest(
        self, archive: SkillArchive, root_prefix: str, mode: ValidationMode
    ) -> tuple[Manifest | None, list[Finding]]:
        entry = self.manifest_parser.locate(archive, root_prefix)
        if entry is None:
            if mode == ValidationMode.AUTOMATED:
                location = f" (looked in {root_prefix})" if root_prefix else ""
                raise ValidationAborted(
                    Finding.error(
                        FindingCode.MISSING_MANIFEST,
                        f"Required {self.manifest_parser.filename} not found at the package root{location}",
                    )
                )
            logger.debug("No %s in package; continuing in interactive mode", self.manifest_parser.filename)
            return None, []

        return self.manifest_parser.parse_entry(entry)

    @staticmethod
    def _package_warnings(archive: SkillArchive, root_prefix: str, manifest: Manifest | None) -> list[Finding]:
        warnings: list[Finding] = []

        if manifest is not None and root_prefix:
            folder_name = root_name(root_prefix)
            if folder_name != manifest.name:
                warnings.append(
                    Finding.warning(
                        FindingCode.NAME_MISMATCH,
                        f'Folder name "{folder_name}" does not match the manifest name "{manifest.name}"',
                    )
                )

        if not any(archive.get_file(root_prefix + name) for name in C.README_FILENAMES):
            warnings.append(Finding.warning(FindingCode.MISSING_README, "README.md is recommended but missing"))

        return warnings


def validate_skill_zip(
    buffer: bytes | bytearray | memoryview,
    mode: ValidationMode | str = ValidationMode.INTERACTIVE,
    limits: ValidationLimits | None = None,
) -> ValidationResult:
    """
    Convenience function to validate a single package archive.

    Args:
        buffer: The ZIP archive bytes
        mode: Validation mode (``interactive``/``automated`` or ``web``/``agent``)
        limits: Optional ceilings

    Returns:
        ValidationResult
    """
    return SkillValidator(limits=limits).validate(buffer, mode)
