# This file defines liveness and version endpoints for API operations.
# Liveness reads configuration only and never calls the policy source,
# so a remote outage does not mark the service down.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from functools import lru_cache
from typing import Annotated
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import get_config, get_policy_config
from src.api.schemas.health_schemas import HealthResponse, PricingSummary, VersionResponse
from src.policy_cost.policy_config import PolicyCostConfig

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
PolicyConfigDep = Annotated[PolicyCostConfig, Depends(get_policy_config)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@lru_cache(maxsize=1)
def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


def pricing_summary(policy_config: PolicyCostConfig) -> PricingSummary:
    """Describe the active pricing setup without exposing the full source URL."""

    return PricingSummary(
        policy_source_host=urlsplit(policy_config.source_url).netloc,
        company_percentage_mode=policy_config.company_percentage_mode,
        max_covered_age=policy_config.max_covered_age,
        cost_tiers=sorted(policy_config.cost_table.tiers),
    )


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
    policy_config: PolicyConfigDep,
) -> dict[str, object]:
    return {
        **config.version_fields(),
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "pricing": pricing_summary(policy_config),
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        **config.version_fields(),
        "request_id": request.state.request_id,
        "api_version_path": config.api_version_path,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }
