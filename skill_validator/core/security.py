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
Per-entry security checks: unsafe archive paths, forbidden files, suspicious
executables and hardcoded secrets.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from enum import Enum
from pathlib import PurePosixPath

from .archive import MEMBER_READ_ERRORS, ArchiveEntry
from .layout import relative_path
from .models import Finding, FindingCode
from .rules.patterns import SUSPICIOUS_EXTENSIONS, TEXT_EXTENSIONS, is_forbidden_path, match_secret

logger = logging.getLogger(__name__)

_DRIVE_LETTER_RE = re.compile(r"^[A-Za-z]:")


class EntryKind(str, Enum):
    """How the scanner treats an entry."""

    UNSAFE_PATH = "unsafe_path"
    SYMLINK = "symlink"
    FORBIDDEN = "forbidden"
    SUSPICIOUS = "suspicious"
    TEXT = "text"
    OTHER = "other"

    @property
    def is_excluded(self) -> bool:
        """Entries the feature detector must ignore."""
        return self in (EntryKind.UNSAFE_PATH, EntryKind.SYMLINK, EntryKind.FORBIDDEN, EntryKind.SUSPICIOUS)


def file_extension(path: str) -> str:
    """Lowercased final suffix, e.g. ``"Setup.EXE"`` -> ``".exe"``."""
    return PurePosixPath(path).suffix.lower()


def is_unsafe_path(path: str) -> bool:
    """Absolute paths, drive letters and ``..`` segments."""
    if path.startswith(("/", "\\")) or _DRIVE_LETTER_RE.match(path):
        return True
    return ".." in re.split(r"[\\/]", path)


def classify_entry(entry: ArchiveEntry, rel_path: str) -> EntryKind:
    """Decide which check applies to *entry*. The first matching kind wins."""
    if is_unsafe_path(entry.path):
        return EntryKind.UNSAFE_PATH
    if entry.is_symlink:
        return EntryKind.SYMLINK
    if is_forbidden_path(rel_path):
        return EntryKind.FORBIDDEN
    ext = file_extension(entry.path)
    if ext in SUSPICIOUS_EXTENSIONS:
        return EntryKind.SUSPICIOUS
    if ext in TEXT_EXTENSIONS:
        return EntryKind.TEXT
    return EntryKind.OTHER


class SecurityScanner:
    """
    Scans every file entry of a package and accumulates findings.

    Never stops early: all entries are checked so a submitter sees every
    problem at once.
    """

    def scan(self, files: Iterable[ArchiveEntry], root_prefix: str) -> list[Finding]:
        """
        Scan file entries in archive order.

        Args:
            files: Non-directory entries
            root_prefix: Package root prefix from the layout resolver

        Returns:
            Findings in scan order
        """
        findings: list[Finding] = []

        for entry in files:
            rel_path = relative_path(entry.path, root_prefix)
            kind = classify_entry(entry, rel_path)
            logger.debug("%s -> %s", entry.path, kind.value)

            if kind == EntryKind.UNSAFE_PATH:
                findings.append(
                    Finding.error(
                        FindingCode.PATH_TRAVERSAL,
                        f"Archive entry escapes the package directory: {entry.path}",
                        entry.path,
                    )
                )
            elif kind == EntryKind.SYMLINK:
                findings.append(
                    Finding.error(
                        FindingCode.SYMLINK_ENTRY,
                        f"Symbolic links are not allowed in packages: {rel_path}",
                        rel_path,
                    )
                )
            elif kind == EntryKind.FORBIDDEN:
                findings.append(
                    Finding.warning(
                        FindingCode.FORBIDDEN_PATH,
                        f"File or directory not allowed in packages: {rel_path}",
                        rel_path,
                    )
                )
            elif kind == EntryKind.SUSPICIOUS:
                findings.append(
                    Finding.error(
                        FindingCode.SUSPICIOUS_BINARY,
                        f"Suspicious executable extension: {rel_path}",
                        rel_path,
                    )
                )
            elif kind == EntryKind.TEXT:
                content = self._read_text(entry)
                if content is not None:
                    findings.extend(self.scan_text(content, rel_path))

        return findings

    def scan_text(self, content: str, rel_path: str) -> list[Finding]:
        """Report at most one SECRET_DETECTED per line."""
        findings: list[Finding] = []
        for line_num, line in enumerate(content.split("\n"), start=1):
            secret_pattern = match_secret(line)
            if secret_pattern is None:
                continue
            logger.debug("%s:%d matched %s", rel_path, line_num, secret_pattern.id)
            findings.append(
                Finding.error(
                    FindingCode.SECRET_DETECTED,
                    f"Potential secret detected in {rel_path} (line {line_num})",
                    rel_path,
                    line_num,
                )
            )
        return findings

    @staticmethod
    def _read_text(entry: ArchiveEntry) -> str | None:
        try:
            return entry.read_text()
        except UnicodeDecodeError:
            logger.debug("Skipping secret scan of %s: not UTF-8 text", entry.path)
        except MEMBER_READ_ERRORS as e:
            logger.warning("Skipping secret scan of %s: %s", entry.path, e)
        return None
