# This file provides dependency factories for FastAPI routes.
# It exists so the policy source and aggregator are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.
# Construction reuses the serverless handler's factory so both entry points price identically.

from __future__ import annotations

from src.api.api_config import ApiConfig, get_api_config
from src.policy_cost.aggregator import PolicyAggregator
from src.policy_cost.handler import get_policy_aggregator as _cached_policy_aggregator
from src.policy_cost.policy_config import PolicyCostConfig, get_policy_cost_config


def get_policy_aggregator() -> PolicyAggregator:
    return _cached_policy_aggregator()


def get_config() -> ApiConfig:
    return get_api_config()


def get_policy_config() -> PolicyCostConfig:
    return get_policy_cost_config()
