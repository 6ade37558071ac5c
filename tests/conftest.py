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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import io
import stat
import struct
import zipfile

import pytest
import yaml

from skill_validator.core.limits import ValidationLimits
from skill_validator.core.validator import SkillValidator

# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def skill_md_text(
    name: str | None = "demo",
    version: str | None = "1.0.0",
    description: str | None = "A demo skill",
    body: str = "# Demo\n\nDoes demo things.\n",
    **fields,
) -> str:
    """Render a SKILL.md with a YAML frontmatter block.

    Fields passed as ``None`` are left out of the block.
    """
    data = {"name": name, "version": version, "description": description, **fields}
    data = {k: v for k, v in data.items() if v is not None}
    return "---\n" + yaml.safe_dump(data, sort_keys=False) + "---\n\n" + body


def build_zip(
    entries: dict[str, str | bytes | None],
    symlinks: dict[str, str] | None = None,
) -> bytes:
    """Build a ZIP archive in memory.

    A ``None`` value (or a name ending in ``/``) becomes a directory entry.
    Entries are written in insertion order.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            if content is None or name.endswith("/"):
                zf.writestr(name if name.endswith("/") else name + "/", "")
            else:
                zf.writestr(name, content)
        for name, target in (symlinks or {}).items():
            info = zipfile.ZipInfo(name)
            info.external_attr = (stat.S_IFLNK | 0o777) << 16
            zf.writestr(info, target)
    return buf.getvalue()


def corrupt_member(data: bytes, name: str) -> bytes:
    """Overwrite the compressed bytes of member *name* with 0xFF.

    The central directory stays intact, so the archive still opens and the
    failure only surfaces when the member is decompressed.
    """
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        info = zf.getinfo(name)
    offset = info.header_offset
    name_len, extra_len = struct.unpack("<HH", data[offset + 26 : offset + 30])
    start = offset + 30 + name_len + extra_len
    end = start + info.compress_size
    return data[:start] + b"\xff" * info.compress_size + data[end:]


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_zip():
    """Factory fixture for raw in-memory archives.

    Usage::

        data = make_zip({
            "demo/": None,
            "demo/SKILL.md": skill_md_text(),
            "demo/logo.bin": b"\\x00\\x01",
        })
    """
    return build_zip


@pytest.fixture
def broken_member():
    """Factory fixture corrupting one member's stream; see :func:`corrupt_member`."""
    return corrupt_member


@pytest.fixture
def skill_md():
    """Factory fixture for SKILL.md text; see :func:`skill_md_text`."""
    return skill_md_text


@pytest.fixture
def make_package():
    """Factory fixture for skill packages.

    Builds a rooted package (``demo/`` directory entry, ``SKILL.md`` and
    ``README.md``) unless told otherwise. Extra *files* are placed under the
    root. ``manifest`` may be ``True`` (generated), ``False`` (omitted) or the
    literal SKILL.md text.
    """

    def _make(
        files: dict[str, str | bytes | None] | None = None,
        root: str | None = "demo",
        manifest: bool | str = True,
        readme: bool = True,
        symlinks: dict[str, str] | None = None,
    ) -> bytes:
        prefix = f"{root}/" if root else ""
        entries: dict[str, str | bytes | None] = {}
        if root:
            entries[prefix] = None
        if manifest is True:
            entries[prefix + "SKILL.md"] = skill_md_text(name=root or "demo")
        elif manifest:
            entries[prefix + "SKILL.md"] = manifest
        if readme:
            entries[prefix + "README.md"] = "# Demo\n\nUsage notes.\n"
        for path, content in (files or {}).items():
            entries[prefix + path] = content
        return build_zip(entries, symlinks={prefix + k: v for k, v in (symlinks or {}).items()})

    return _make


@pytest.fixture
def validator() -> SkillValidator:
    """A validator with the default limits."""
    return SkillValidator()


@pytest.fixture
def small_limits() -> ValidationLimits:
    """Tight ceilings so the guards can be exercised with tiny archives."""
    return ValidationLimits(
        max_zip_size_bytes=4096,
        max_uncompressed_size_bytes=2048,
        max_file_count=5,
        max_description_length=40,
    )
