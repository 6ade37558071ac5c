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

"""API router for Skill Validator endpoints.

Composable ``APIRouter`` so the pre-check can be mounted into an existing
FastAPI application (e.g. the marketplace upload service).
"""

import asyncio
import logging
from functools import lru_cache

try:
    from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
    from pydantic import BaseModel, Field
except ImportError:
    raise ImportError("API server requires FastAPI. Install with: pip install fastapi uvicorn python-multipart")

from .. import __version__ as PACKAGE_VERSION
from ..config.config import Config
from ..core.models import ValidationMode
from ..core.validator import SkillValidator

logger = logging.getLogger("skill_validator.api")

router = APIRouter()


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class FindingModel(BaseModel):
    """A single error or warning."""

    type: str = Field(..., description="'error' or 'warning'")
    code: str
    message: str
    file: str | None = None
    line: int | None = None


class StatsModel(BaseModel):
    """Package statistics."""

    file_count: int
    total_size: int
    has_scripts: bool
    has_config: bool
    has_assets: bool
    has_references: bool


class ValidationResponse(BaseModel):
    """Response model for validation results."""

    valid: bool
    errors: list[FindingModel]
    warnings: list[FindingModel]
    manifest: dict | None = None
    stats: StatsModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Configuration read once from the environment."""
    return Config.from_env()


def get_validator(config: Config = Depends(get_config)) -> SkillValidator:
    return SkillValidator(limits=config.to_limits())


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/", response_model=dict)
async def root():
    """Root endpoint."""
    return {"service": "Skill Validator API", "version": PACKAGE_VERSION, "docs": "/docs", "health": "/health"}


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=PACKAGE_VERSION)


@router.post("/validate", response_model=ValidationResponse)
async def validate_upload(
    file: UploadFile = File(..., description="Skill package ZIP archive"),
    mode: str | None = Form(None, description="interactive (web) or automated (agent)"),
    validator: SkillValidator = Depends(get_validator),
    config: Config = Depends(get_config),
):
    """Validate an uploaded skill package without submitting it."""
    if not file.filename or not file.filename.lower().endswith(".zip"):
        raise HTTPException(status_code=400, detail="File must be a ZIP archive")

    try:
        validation_mode = ValidationMode.parse(mode) if mode else config.default_mode
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown validation mode: {mode!r}")

    # One byte past the ceiling is enough for the size guard to fire
    data = await file.read(validator.limits.max_zip_size_bytes + 1)
    logger.info("Validating upload %s (%d bytes, %s mode)", file.filename, len(data), validation_mode.value)

    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, validator.validate, data, validation_mode)
    return result.to_dict()
