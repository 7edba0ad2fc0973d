# This file defines response schemas for the liveness and version endpoints.
# Liveness reports which policy source and pricing mode the process is configured with.
# Version reports the API path, schema, and build the process is running.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class PricingSummary(BaseModel):
    policy_source_host: str
    company_percentage_mode: str
    max_covered_age: int
    cost_tiers: list[int]


class HealthResponse(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    status: str
    environment: str
    service_name: str
    pricing: PricingSummary
    timestamp: datetime


class VersionResponse(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    api_version_path: str
    app_version: str
    git_commit: str | None = None
    service_name: str
    timestamp: datetime
