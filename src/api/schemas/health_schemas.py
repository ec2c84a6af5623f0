# This file defines response schemas for health, readiness, and version endpoints.
# Stable health schemas make monitoring checks straightforward to automate.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    success: bool
    status: str
    message: str
    environment: str
    service_name: str
    request_id: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    success: bool
    request_id: str
    db_connected: bool
    tables_ready: bool
    missing_tables: list[str]
    ready: bool
    database: str
    timestamp: datetime


class VersionResponse(BaseModel):
    success: bool
    request_id: str
    api_prefix: str
    app_version: str
    git_commit: str | None = None
    project: str
    version: str
    timestamp: datetime
