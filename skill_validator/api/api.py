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

"""FastAPI application factory for the Skill Validator.

``create_app`` builds a standalone app around the validation router. A
``Config`` passed in is pinned for every request; otherwise each request
reads ``SKILL_VALIDATOR_*`` through ``router.get_config``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__ as PACKAGE_VERSION
from ..config.config import Config
from ..core.exceptions import ConfigurationError
from .router import get_config
from .router import router as validation_router

logger = logging.getLogger("skill_validator.api")


async def _configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Rejecting %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": f"Server misconfigured: {exc}"})


def create_app(config: Config | None = None) -> FastAPI:
    """Build the validation API.

    Args:
        config: Settings to serve with. When omitted, settings come from the
            environment on first use.

    Returns:
        A FastAPI application exposing ``/``, ``/health`` and ``/validate``.
    """
    application = FastAPI(
        title="Skill Validator API",
        description="Intake validation API for marketplace skill packages",
        version=PACKAGE_VERSION,
    )
    application.include_router(validation_router)
    application.add_exception_handler(ConfigurationError, _configuration_error_handler)

    if config is not None:
        application.dependency_overrides[get_config] = lambda: config
        logger.debug("Serving with pinned limits %s", config.to_limits())

    return application


app = create_app()
