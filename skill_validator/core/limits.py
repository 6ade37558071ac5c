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

"""Resource ceilings passed into the validation engine."""

from dataclasses import dataclass

from ..config.constants import SkillValidatorConstants as C


@dataclass(frozen=True)
class ValidationLimits:
    """Safety limits for package validation."""

    max_zip_size_bytes: int = C.DEFAULT_MAX_ZIP_SIZE_MB * C.MIB  # 50MB
    max_uncompressed_size_bytes: int = C.DEFAULT_MAX_UNCOMPRESSED_SIZE_MB * C.MIB  # 200MB, zip bomb threshold
    max_file_count: int = C.DEFAULT_MAX_FILES
    max_description_length: int = C.DEFAULT_MAX_DESCRIPTION_LENGTH
    manifest_filename: str = C.MANIFEST_FILENAME
