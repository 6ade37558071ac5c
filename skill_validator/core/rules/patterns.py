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
Detection tables for the package security scanner.

Secret detection is heuristic: each :class:`SecretPattern` is a single-line
regex. Adding a pattern to :data:`SECRET_PATTERNS` is enough to enable it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SecretPattern:
    """A named single-line credential pattern."""

    id: str
    description: str
    pattern: str
    flags: int = 0
    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "compiled", re.compile(self.pattern, self.flags))

    def search(self, line: str) -> re.Match[str] | None:
        return self.compiled.search(line)


SECRET_PATTERNS: tuple[SecretPattern, ...] = (
    SecretPattern(
        id="GENERIC_API_KEY",
        description="API key assignment",
        pattern=r"""(?:api[_-]?key|apikey)\s*[:=]\s*['"][a-zA-Z0-9_\-]{20,}['"]""",
        flags=re.IGNORECASE,
    ),
    SecretPattern(
        id="GENERIC_SECRET",
        description="Secret key assignment",
        pattern=r"""(?:secret[_-]?key|secret)\s*[:=]\s*['"][a-zA-Z0-9_\-]{20,}['"]""",
        flags=re.IGNORECASE,
    ),
    SecretPattern(
        id="PASSWORD",
        description="Password assignment",
        pattern=r"""(?:password|passwd|pwd)\s*[:=]\s*['"][^'"]{8,}['"]""",
        flags=re.IGNORECASE,
    ),
    SecretPattern(
        id="ACCESS_TOKEN",
        description="Access, auth or bearer token assignment",
        pattern=r"""(?:access[_-]?token|auth[_-]?token|bearer)\s*[:=]\s*['"][a-zA-Z0-9_\-]{20,}['"]""",
        flags=re.IGNORECASE,
    ),
    SecretPattern(
        id="STRIPE_KEY",
        description="Stripe live or test key",
        pattern=r"(?:sk_live|sk_test|pk_live|pk_test)_[a-zA-Z0-9]{20,}",
    ),
    SecretPattern(
        id="GITHUB_PAT",
        description="GitHub personal access token",
        pattern=r"ghp_[a-zA-Z0-9]{36,}",
    ),
    SecretPattern(
        id="PRIVATE_KEY",
        description="PEM private key block",
        pattern=r"-----BEGIN (?:RSA |EC |DSA )?PRIVATE KEY-----",
    ),
)


def match_secret(line: str) -> SecretPattern | None:
    """Return the first pattern matching *line*, in table order."""
    for secret_pattern in SECRET_PATTERNS:
        if secret_pattern.search(line):
            return secret_pattern
    return None


# Version control, environment secrets, dependency caches and OS metadata.
# An entry is forbidden when its package-relative path starts with an item
# or contains ``"/" + item``.
FORBIDDEN_PATHS: tuple[str, ...] = (
    ".git/",
    ".env",
    "node_modules/",
    ".DS_Store",
    "__MACOSX/",
)

# Native executables, installers and Windows script hosts
SUSPICIOUS_EXTENSIONS = frozenset(
    {
        ".exe",
        ".dll",
        ".bin",
        ".bat",
        ".cmd",
        ".com",
        ".scr",
        ".msi",
        ".vbs",
        ".wsh",
        ".wsf",
        ".ps1",
        ".pif",
    }
)

# Files decoded and scanned line by line for secrets
TEXT_EXTENSIONS = frozenset(
    {
        ".py",
        ".sh",
        ".js",
        ".ts",
        ".yaml",
        ".yml",
        ".json",
        ".md",
        ".txt",
        ".env",
        ".cfg",
        ".ini",
        ".toml",
    }
)


def is_forbidden_path(relative_path: str) -> bool:
    return any(relative_path.startswith(item) or ("/" + item) in relative_path for item in FORBIDDEN_PATHS)
