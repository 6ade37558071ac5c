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

"""Run the Skill Validator API under uvicorn."""

from __future__ import annotations

from ..config.config import Config

APP_IMPORT_PATH = "skill_validator.api.api:app"


def run_server(
    host: str = "localhost",
    port: int = 8000,
    reload: bool = False,
    config: Config | None = None,
    log_level: str = "info",
) -> None:
    """Serve the validation API.

    With ``reload`` uvicorn needs an import string, so the module-level app is
    served and settings are read from the environment. Otherwise an app is
    built around ``config``.
    """
    import uvicorn

    if reload:
        uvicorn.run(APP_IMPORT_PATH, host=host, port=port, reload=True, log_level=log_level)
        return

    from .api import create_app

    uvicorn.run(create_app(config), host=host, port=port, log_level=log_level)
