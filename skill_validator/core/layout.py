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

"""Root-folder detection for rooted vs. flat package layouts."""

from __future__ import annotations

from .archive import SkillArchive


def resolve_root_prefix(archive: SkillArchive) -> str:
    """
    Return the prefix every lookup inside the package is relative to.

    A package zipped as a single enclosing folder (``demo/SKILL.md``,
    ``demo/README.md``, ...) resolves to ``"demo/"``, provided ``demo/`` is
    itself a directory entry. Anything else resolves to ``""``.
    """
    paths = [entry.path for entry in archive.files]
    if not paths:
        return ""

    first_part = paths[0].split("/")[0]
    prefix = first_part + "/"
    if all(p.startswith(prefix) for p in paths) and archive.has_directory(prefix):
        return prefix
    return ""


def relative_path(path: str, root_prefix: str) -> str:
    """Strip *root_prefix* from an archive path."""
    if root_prefix and path.startswith(root_prefix):
        return path[len(root_prefix) :]
    return path


def root_name(root_prefix: str) -> str:
    """``"demo/"`` -> ``"demo"``."""
    return root_prefix.rstrip("/")
