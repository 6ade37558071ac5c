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
Skill Validator - Intake validation for marketplace skill packages.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skill-validator")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``python -m skill_validator.cli.cli`` from importing the FastAPI
    stack or the engine before argument parsing.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "SkillValidatorConstants": (".config.constants", "SkillValidatorConstants"),
        "Finding": (".core.models", "Finding"),
        "FindingCode": (".core.models", "FindingCode"),
        "FindingLevel": (".core.models", "FindingLevel"),
        "Manifest": (".core.models", "Manifest"),
        "ValidationMode": (".core.models", "ValidationMode"),
        "ValidationResult": (".core.models", "ValidationResult"),
        "ValidationStats": (".core.models", "ValidationStats"),
        "ValidationLimits": (".core.limits", "ValidationLimits"),
        "SkillValidator": (".core.validator", "SkillValidator"),
        "validate_skill_zip": (".core.validator", "validate_skill_zip"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "SkillValidator",
    "validate_skill_zip",
    "ValidationMode",
    "ValidationResult",
    "ValidationStats",
    "ValidationLimits",
    "Finding",
    "FindingCode",
    "FindingLevel",
    "Manifest",
    "Config",
    "SkillValidatorConstants",
]
