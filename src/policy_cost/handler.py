# This module exposes the serverless entry point for the policy cost calculation.
# It exists so a function runtime can invoke the service with no arguments and receive a status code and body.
# The aggregator is built once per process and reused; its source keeps one HTTP session per thread.
# Source faults are not caught here; the invoking runtime applies its default failure behavior.

from __future__ import annotations

from functools import lru_cache
from typing import Any

from src.common.logging import configure_logging
from src.policy_cost.aggregator import PolicyAggregator
from src.policy_cost.policy_config import PolicyCostConfig, get_policy_cost_config
from src.policy_cost.policy_source import PolicySourceClient


def build_policy_aggregator(config: PolicyCostConfig) -> PolicyAggregator:
    source = PolicySourceClient(url=config.source_url, timeout_seconds=config.source_timeout_seconds)
    return PolicyAggregator(source=source, config=config)


@lru_cache(maxsize=1)
def get_policy_aggregator() -> PolicyAggregator:
    return build_policy_aggregator(get_policy_cost_config())


def policy(event: Any = None, context: Any = None) -> dict[str, Any]:
    configure_logging()
    return get_policy_aggregator().handle_policy_request().to_invocation_response()
