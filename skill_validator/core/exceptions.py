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

"""Skill Validator exceptions.

None of these cross the :func:`~skill_validator.core.validator.validate_skill_zip`
boundary: the engine turns every expected failure into a finding. They are
raised between pipeline stages and by the configuration layer.

Example:
    >>> from skill_validator.core.archive import SkillArchive
    >>> from skill_validator.core.exceptions import ValidationAborted
    >>>
    >>> try:
    ...     archive = SkillArchive.open(b"not a zip", limits)
    ... except ValidationAborted as e:
    ...     print(e.finding.code)
    INVALID_ZIP
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Finding, ValidationStats


class SkillValidatorError(Exception):
    """Base exception for all Skill Validator errors."""

    pass


class ArchiveOpenError(SkillValidatorError):
    """Raised when the buffer cannot be opened as a ZIP archive.

    This can indicate:
    - Data that is not a ZIP at all
    - A truncated or unreadable central directory
    """

    pass


class ValidationAborted(SkillValidatorError):
    """Raised by a pipeline stage to stop validation with a terminal finding.

    Carries the finding to report and, where the stage had already computed
    them, the partial statistics.
    """

    def __init__(self, finding: Finding, stats: ValidationStats | None = None):
        super().__init__(finding.message)
        self.finding = finding
        self.stats = stats


class ConfigurationError(SkillValidatorError):
    """Raised when configuration values are invalid.

    This indicates:
    - Non-numeric or negative size/count ceilings
    - Unknown validation mode names
    """

    pass
