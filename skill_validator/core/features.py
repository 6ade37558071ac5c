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

"""Detection of the conventional skill package directories."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..config.constants import SkillValidatorConstants as C
from .archive import ArchiveEntry
from .layout import relative_path
from .security import classify_entry


@dataclass(frozen=True)
class PackageFeatures:
    has_scripts: bool = False
    has_config: bool = False
    has_assets: bool = False
    has_references: bool = False


def detect_features(files: Iterable[ArchiveEntry], root_prefix: str) -> PackageFeatures:
    """
    Flag which of ``scripts/``, ``config/``, ``assets/`` and ``references/``
    hold at least one file. Forbidden, suspicious and unsafe entries are
    ignored.
    """
    found = {C.SCRIPTS_DIR: False, C.CONFIG_DIR: False, C.ASSETS_DIR: False, C.REFERENCES_DIR: False}

    for entry in files:
        rel_path = relative_path(entry.path, root_prefix)
        if classify_entry(entry, rel_path).is_excluded:
            continue
        for directory in found:
            if rel_path.startswith(directory):
                found[directory] = True

    return PackageFeatures(
        has_scripts=found[C.SCRIPTS_DIR],
        has_config=found[C.CONFIG_DIR],
        has_assets=found[C.ASSETS_DIR],
        has_references=found[C.REFERENCES_DIR],
    )
