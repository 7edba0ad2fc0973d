# This file tests the policy cost endpoint for success, unavailable, and failure responses.
# It exists to confirm the HTTP route exposes the same contract as the serverless handler.
# The tests also verify that source faults map to the structured error payload.
# This coverage helps catch contract regressions before deployment.

from __future__ import annotations

import pytest

from src.api.schemas.common import ErrorResponse
from src.api.schemas.policy_schemas import PolicyCostResponseV1
from src.policy_cost.aggregator import PolicyAggregator
from src.policy_cost.cost_rule import DEFAULT_COST_TABLE
from src.policy_cost.policy_config import PolicyCostConfig
from src.policy_cost.policy_source import PolicySourceError
from tests.api.support import FakePolicySource, api_test_client

DOCUMENT = {
    "policy": {
        "workers": [
            {"name": "Ana", "age": 40, "childs": 1},
            {"name": "Luis", "age": 70, "childs": 2},
        ],
        "has_dental_care": True,
        "company_percentage": 100,
    }
}


def _config(company_percentage_mode: str = "pass_through") -> PolicyCostConfig:
    return PolicyCostConfig(
        source_url="https://policy.example.test/policy",
        source_timeout_seconds=5.0,
        max_covered_age=65,
        company_percentage_mode=company_percentage_mode,
        cost_table=DEFAULT_COST_TABLE,
    )


def _aggregator(source: FakePolicySource, **config_kwargs: str) -> PolicyAggregator:
    return PolicyAggregator(source=source, config=_config(**config_kwargs))


def test_policy_endpoint_returns_priced_workers() -> None:
    aggregator = _aggregator(FakePolicySource(DOCUMENT))
    with api_test_client(aggregator=aggregator) as client:
        response = client.get("/api/v1/policy")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.text == aggregator.handle_policy_request().body

    parsed = PolicyCostResponseV1.model_validate(response.json())
    assert parsed.input.company_percentage == 100
    ana, luis = parsed.data.policy.workers
    assert ana.cost.company == pytest.approx(0.6346)
    assert ana.cost.worker == 0
    assert luis.cost.company == 0
    assert parsed.data.policy.total.company == pytest.approx(0.6346)
    assert response.json()["data"]["policy"]["workers"][0]["name"] == "Ana"


def test_policy_endpoint_returns_503_when_source_is_empty() -> None:
    with api_test_client(aggregator=_aggregator(FakePolicySource(None))) as client:
        response = client.get("/api/v1/policy")

    assert response.status_code == 503
    assert response.text == '{\n  "message": "Service Unavailable: Error al cargar los datos"\n}'


def test_policy_endpoint_maps_source_fault_to_502() -> None:
    source = FakePolicySource(error=PolicySourceError("connection refused"))
    with api_test_client(aggregator=_aggregator(source)) as client:
        response = client.get("/api/v1/policy", headers={"x-request-id": "req-502"})

    assert response.status_code == 502
    payload = ErrorResponse.model_validate(response.json())
    assert payload.error_code == "POLICY_SOURCE_UNAVAILABLE"
    assert payload.request_id == "req-502"


def test_policy_endpoint_maps_rejected_percentage_to_422() -> None:
    document = {"policy": {**DOCUMENT["policy"], "company_percentage": 150}}
    aggregator = _aggregator(FakePolicySource(document), company_percentage_mode="reject")
    with api_test_client(aggregator=aggregator) as client:
        response = client.get("/api/v1/policy")

    assert response.status_code == 422
    assert response.json()["error_code"] == "INVALID_COMPANY_PERCENTAGE"


def test_policy_endpoint_maps_malformed_document_to_500() -> None:
    aggregator = _aggregator(FakePolicySource({"unexpected": True}))
    with api_test_client(aggregator=aggregator, raise_server_exceptions=False) as client:
        response = client.get("/api/v1/policy")

    assert response.status_code == 500
    assert response.json()["error_code"] == "INTERNAL_SERVER_ERROR"


def test_policy_endpoint_is_documented_in_openapi() -> None:
    with api_test_client() as client:
        schema = client.get("/openapi.json").json()

    responses = schema["paths"]["/api/v1/policy"]["get"]["responses"]
    assert {"200", "502", "503"} <= set(responses)
    assert "PolicyCostResponseV1" in schema["components"]["schemas"]


def test_policy_metrics_count_outcomes_under_route_template() -> None:
    with api_test_client(aggregator=_aggregator(FakePolicySource(DOCUMENT))) as client:
        client.get("/api/v1/policy")
    with api_test_client(aggregator=_aggregator(FakePolicySource(error=PolicySourceError("down")))) as client:
        client.get("/api/v1/policy")
        metrics = client.get("/metrics").text

    assert 'policy_cost_responses_total{status_code="200"}' in metrics
    assert "policy_source_failures_total" in metrics
    assert 'route="/api/v1/policy",status_code="502"' in metrics
