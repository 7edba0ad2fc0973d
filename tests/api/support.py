# This file provides shared helpers for API endpoint tests.
# It exists so tests can override the policy aggregator without touching the real policy source.
# The helpers build consistent config objects and scoped TestClient contexts.
# Centralized test wiring keeps API tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from src.api.api_config import ApiConfig
from src.api.app import app
from src.api.dependencies import get_config, get_policy_aggregator, get_policy_config
from src.policy_cost.policy_config import PolicyCostConfig


def build_test_config() -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Policy Cost API",
        api_version_path="/api/v1",
        schema_version="1.0.0",
        environment="test",
        allowed_origins=[],
        app_version="0.1.0",
    )


class FakePolicySource:
    """Static policy source for endpoint tests."""

    def __init__(self, document: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.document = document
        self.error = error
        self.calls = 0

    def fetch_policy_document(self) -> dict[str, Any] | None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.document


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    aggregator: Any | None = None,
    policy_config: PolicyCostConfig | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if aggregator is not None:
        app.dependency_overrides[get_policy_aggregator] = lambda: aggregator
    if policy_config is not None:
        app.dependency_overrides[get_policy_config] = lambda: policy_config

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
