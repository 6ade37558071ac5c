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
SKILL.md locator and parser.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

import yaml
from frontmatter.default_handlers import YAMLHandler

from ..config.constants import SkillValidatorConstants as C
from .archive import MEMBER_READ_ERRORS, ArchiveEntry, SkillArchive
from .exceptions import ValidationAborted
from .limits import ValidationLimits
from .models import Finding, FindingCode, Manifest, ManifestConfig, PlatformRecord, Requirements

logger = logging.getLogger(__name__)

SEMVER_PATTERN = re.compile(r"\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?")

KNOWN_FIELDS = frozenset({"name", "version", "description", "author", "license", "homepage", "tested_on", "metadata"})

_yaml_handler = YAMLHandler()


def is_valid_semver(version: str) -> bool:
    """``MAJOR.MINOR.PATCH`` with an optional ``-prerelease`` suffix."""
    return SEMVER_PATTERN.fullmatch(version) is not None


def split_frontmatter(text: str) -> tuple[str, str] | None:
    """
    Split manifest text into its YAML block and Markdown body.

    The text must open with a ``---`` line and contain a closing ``---``
    line; otherwise ``None`` is returned.
    """
    if not _yaml_handler.detect(text):
        return None
    try:
        fm, body = _yaml_handler.split(text)
    except ValueError:
        return None
    return fm, body.lstrip("\n")


def _optional_str(value: Any) -> str | None:
    if not value:
        return None
    return str(value)


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    return (str(value),)


def _build_platform_record(item: Any) -> PlatformRecord:
    if not isinstance(item, Mapping):
        return PlatformRecord(platform=_optional_str(item))
    return PlatformRecord(
        platform=_optional_str(item.get("platform")),
        node=_optional_str(item.get("node")),
        openclaw=_optional_str(item.get("openclaw")),
        extra={k: v for k, v in item.items() if k not in ("platform", "node", "openclaw")},
    )


def _build_manifest_config(raw: Mapping[str, Any]) -> ManifestConfig:
    hints = raw.get("openclaw")
    if not isinstance(hints, Mapping):
        return ManifestConfig(raw=dict(raw))

    requires = None
    raw_requires = hints.get("requires")
    if isinstance(raw_requires, Mapping):
        requires = Requirements(
            bins=_str_tuple(raw_requires.get("bins")),
            packages=_str_tuple(raw_requires.get("packages")),
        )

    return ManifestConfig(emoji=_optional_str(hints.get("emoji")), requires=requires, raw=dict(raw))


class ManifestParser:
    """Locates and parses the package manifest.

    The manifest is a Markdown file opened by a YAML frontmatter block:

        ---
        name: demo
        version: 1.0.0
        description: "What the skill does"
        ---

        # Demo
    """

    def __init__(self, limits: ValidationLimits | None = None):
        self.limits = limits or ValidationLimits()

    @property
    def filename(self) -> str:
        return self.limits.manifest_filename

    def locate(self, archive: SkillArchive, root_prefix: str) -> ArchiveEntry | None:
        """Find the manifest at the package root (case-sensitive)."""
        return archive.get_file(root_prefix + self.filename)

    def parse_entry(self, entry: ArchiveEntry) -> tuple[Manifest | None, list[Finding]]:
        """
        Read and parse a manifest archive entry.

        Returns:
            Tuple of (Manifest or None, accumulated findings)

        Raises:
            ValidationAborted: If the manifest cannot be read or its
                frontmatter cannot be parsed
        """
        try:
            text = entry.read_text()
        except (UnicodeDecodeError, *MEMBER_READ_ERRORS) as e:
            logger.debug("Cannot read %s: %s", entry.path, e)
            raise ValidationAborted(
                Finding.error(FindingCode.MANIFEST_UNREADABLE, f"Unable to read {self.filename}", self.filename)
            )
        return self.parse_text(text)

    def parse_text(self, text: str) -> tuple[Manifest | None, list[Finding]]:
        """
        Parse manifest text.

        Returns:
            Tuple of (Manifest or None, accumulated findings). The manifest
            is ``None`` whenever a required field is missing.

        Raises:
            ValidationAborted: On missing delimiters or malformed YAML
        """
        split = split_frontmatter(text.lstrip("\ufeff"))
        if split is None:
            raise ValidationAborted(
                Finding.error(
                    FindingCode.INVALID_FRONTMATTER,
                    f"{self.filename} must start with a YAML block (--- ... ---)",
                    self.filename,
                )
            )
        fm, body = split

        try:
            data = _yaml_handler.load(fm)
        except yaml.YAMLError as e:
            raise ValidationAborted(
                Finding.error(FindingCode.INVALID_YAML, f"Invalid YAML in {self.filename}: {e}", self.filename)
            )

        if not isinstance(data, Mapping):
            raise ValidationAborted(
                Finding.error(
                    FindingCode.INVALID_YAML, f"The YAML block of {self.filename} must be a mapping", self.filename
                )
            )

        return self._validate(data, body)

    def _validate(self, data: Mapping[str, Any], body: str) -> tuple[Manifest | None, list[Finding]]:
        findings: list[Finding] = []

        missing_fields = [f for f in C.REQUIRED_MANIFEST_FIELDS if not data.get(f)]
        if missing_fields:
            findings.append(
                Finding.error(
                    FindingCode.MISSING_REQUIRED_FIELDS,
                    f"Missing required fields in {self.filename}: {', '.join(missing_fields)}",
                    self.filename,
                )
            )

        version = data.get("version")
        if version and not is_valid_semver(str(version)):
            findings.append(
                Finding.error(
                    FindingCode.INVALID_VERSION,
                    f'Invalid version format "{version}". Use semantic versioning (e.g. 1.0.0)',
                    self.filename,
                )
            )

        description = data.get("description")
        max_length = self.limits.max_description_length
        if description and len(str(description)) > max_length:
            findings.append(
                Finding.error(
                    FindingCode.DESCRIPTION_TOO_LONG,
                    f"Description is {len(str(description))} characters; the limit is {max_length}",
                    self.filename,
                )
            )

        if missing_fields:
            return None, findings

        return self._build_manifest(data, body), findings

    def _build_manifest(self, data: Mapping[str, Any], body: str) -> Manifest:
        extra = {k: v for k, v in data.items() if k not in KNOWN_FIELDS}

        scalars: dict[str, str | None] = {}
        for key in ("author", "license", "homepage"):
            value = data.get(key)
            if isinstance(value, (Mapping, list)):
                # Structured values are kept as written rather than stringified
                extra[key] = value
                scalars[key] = None
            else:
                scalars[key] = _optional_str(value)

        tested_on = None
        raw_tested_on = data.get("tested_on")
        if isinstance(raw_tested_on, list):
            tested_on = tuple(_build_platform_record(item) for item in raw_tested_on)
        elif raw_tested_on:
            extra["tested_on"] = raw_tested_on

        metadata = None
        raw_metadata = data.get("metadata")
        if isinstance(raw_metadata, Mapping):
            metadata = _build_manifest_config(raw_metadata)
        elif raw_metadata:
            extra["metadata"] = raw_metadata

        return Manifest(
            name=str(data["name"]),
            version=str(data["version"]),
            description=str(data["description"]),
            author=scalars["author"],
            license=scalars["license"],
            homepage=scalars["homepage"],
            tested_on=tested_on,
            metadata=metadata,
            body=body,
            extra=extra,
        )
