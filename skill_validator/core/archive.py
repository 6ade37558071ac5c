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
In-memory ZIP reader for submitted skill packages.

Opens an untrusted buffer with safety limits (compressed size, file count,
declared uncompressed size) before any member content is decompressed.
"""

from __future__ import annotations

import io
import logging
import lzma
import stat
import zipfile
import zlib
from dataclasses import dataclass, field

from .exceptions import ArchiveOpenError, ValidationAborted
from .limits import ValidationLimits
from .models import Finding, FindingCode, ValidationStats

logger = logging.getLogger(__name__)

_MIB = 1024 * 1024

# Failures while decompressing a single member (CRC mismatch, corrupt stream,
# unsupported method, encryption)
MEMBER_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
    NotImplementedError,
    RuntimeError,
    EOFError,
    OSError,
)


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of an opened archive.

    Content is decompressed lazily by :meth:`read_bytes` / :meth:`read_text`.
    """

    path: str
    is_directory: bool
    compressed_size: int
    uncompressed_size: int
    is_symlink: bool = False
    _info: zipfile.ZipInfo | None = field(default=None, repr=False, compare=False)
    _zip: zipfile.ZipFile | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_zipinfo(cls, zf: zipfile.ZipFile, info: zipfile.ZipInfo) -> ArchiveEntry:
        return cls(
            path=info.filename,
            is_directory=info.is_dir(),
            compressed_size=info.compress_size,
            uncompressed_size=info.file_size,
            is_symlink=_is_zip_symlink(info),
            _info=info,
            _zip=zf,
        )

    def read_bytes(self) -> bytes:
        """Decompress the member.

        Raises:
            zipfile.BadZipFile: On CRC mismatch or a corrupt local header
            zlib.error: On a corrupt deflate stream
            NotImplementedError: For unsupported compression methods
            RuntimeError: For encrypted members
        """
        if self._zip is None or self._info is None:
            raise ValueError(f"Entry {self.path} is not bound to an open archive")
        return self._zip.read(self._info)

    def read_text(self, encoding: str = "utf-8") -> str:
        """Decompress and decode the member (strict decoding)."""
        return self.read_bytes().decode(encoding)


def _is_zip_symlink(info: zipfile.ZipInfo) -> bool:
    """Check whether a ZIP entry encodes a symbolic link.

    ZIP archives store Unix file-mode bits in the upper 16 bits of
    ``external_attr``.  A symlink is indicated by the ``S_IFLNK`` flag.
    """
    unix_mode = (info.external_attr >> 16) & 0xFFFF
    return unix_mode != 0 and stat.S_ISLNK(unix_mode)


def _open_zip(buffer: bytes | bytearray | memoryview) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(buffer), "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, OSError, ValueError) as e:
        raise ArchiveOpenError(str(e)) from e


class SkillArchive:
    """
    A ZIP archive opened from an in-memory buffer.

    Use :meth:`open` rather than the constructor: it applies the size and
    count guards and raises :class:`ValidationAborted` with the terminal
    finding when one fires.
    """

    def __init__(self, zf: zipfile.ZipFile, entries: list[ArchiveEntry]):
        self._zip = zf
        self.entries = entries
        self.files = [e for e in entries if not e.is_directory]
        self._files_by_path = {e.path: e for e in self.files}
        self._directories = {e.path for e in entries if e.is_directory}

    @classmethod
    def open(cls, buffer: bytes | bytearray | memoryview, limits: ValidationLimits) -> SkillArchive:
        """
        Open *buffer* as a skill package archive.

        Args:
            buffer: Raw archive bytes (never modified)
            limits: Ceilings to enforce

        Returns:
            The opened archive

        Raises:
            ValidationAborted: With ZIP_TOO_LARGE, INVALID_ZIP, EMPTY_ZIP,
                TOO_MANY_FILES or UNCOMPRESSED_TOO_LARGE
        """
        zip_size = len(buffer)
        if zip_size > limits.max_zip_size_bytes:
            raise ValidationAborted(
                Finding.error(
                    FindingCode.ZIP_TOO_LARGE,
                    f"ZIP file exceeds the {limits.max_zip_size_bytes / _MIB:.0f} MB limit ({zip_size / _MIB:.1f} MB)",
                )
            )

        try:
            zf = _open_zip(buffer)
        except ArchiveOpenError as e:
            logger.debug("Buffer is not a readable ZIP: %s", e)
            raise ValidationAborted(Finding.error(FindingCode.INVALID_ZIP, "The file is not a valid ZIP archive"))

        try:
            archive = cls(zf, [ArchiveEntry.from_zipinfo(zf, info) for info in zf.infolist()])
            archive._check_limits(limits)
        except BaseException:
            zf.close()
            raise
        return archive

    def _check_limits(self, limits: ValidationLimits) -> None:
        file_count = len(self.files)

        if file_count == 0:
            raise ValidationAborted(Finding.error(FindingCode.EMPTY_ZIP, "The ZIP archive is empty"))

        if file_count > limits.max_file_count:
            raise ValidationAborted(
                Finding.error(
                    FindingCode.TOO_MANY_FILES,
                    f"The ZIP archive contains too many files ({file_count}/{limits.max_file_count} max)",
                ),
                stats=ValidationStats(file_count=file_count),
            )

        total_size = self.total_uncompressed_size
        if total_size > limits.max_uncompressed_size_bytes:
            raise ValidationAborted(
                Finding.error(
                    FindingCode.UNCOMPRESSED_TOO_LARGE,
                    f"Uncompressed size exceeds {limits.max_uncompressed_size_bytes / _MIB:.0f} MB "
                    f"({total_size / _MIB:.1f} MB)",
                ),
                stats=ValidationStats(file_count=file_count, total_size=total_size),
            )

    @property
    def total_uncompressed_size(self) -> int:
        """Sum of declared uncompressed sizes of all files."""
        return sum(e.uncompressed_size for e in self.files)

    def get_file(self, path: str) -> ArchiveEntry | None:
        """Exact, case-sensitive lookup of a non-directory entry."""
        return self._files_by_path.get(path)

    def has_directory(self, path: str) -> bool:
        """Whether *path* (with trailing slash) is an explicit directory entry."""
        return path in self._directories

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> SkillArchive:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
