# This module orchestrates one policy cost request from fetch to response body.
# It exists so the serverless handler, the HTTP API, and the CLI job share the same request flow.
# The aggregator fetches the document once, prices every worker in order, and sums the shares.
# Transport faults from the source propagate; only an empty document is answered locally with a 503.

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from src.policy_cost.contracts import (
    PolicyDocument,
    PolicyResponse,
    PolicyTotal,
    priced_worker,
    worker_costs,
)
from src.policy_cost.cost_rule import compute_cost
from src.policy_cost.policy_config import PolicyCostConfig
from src.policy_cost.policy_source import PolicySource
from src.policy_cost.response_body import render_body

LOGGER = logging.getLogger("policy_cost")

SUCCESS_MESSAGE = "Go Serverless v1.0! Your function executed successfully!"
SERVICE_UNAVAILABLE_MESSAGE = "Service Unavailable: Error al cargar los datos"


def price_workers(
    workers: Sequence[Mapping[str, Any]],
    *,
    has_dental_care: bool,
    company_percentage: float,
    config: PolicyCostConfig,
) -> list[dict[str, Any]]:
    return [
        priced_worker(
            worker,
            compute_cost(
                worker["age"],
                worker["childs"],
                has_dental_care,
                company_percentage,
                cost_table=config.cost_table,
                max_covered_age=config.max_covered_age,
                percentage_mode=config.company_percentage_mode,
            ),
        )
        for worker in workers
    ]


def summarize_costs(priced: Sequence[Mapping[str, Any]]) -> PolicyTotal:
    costs = worker_costs(priced)
    return PolicyTotal(
        company=sum(cost["company"] for cost in costs),
        workers=sum(cost["worker"] for cost in costs),
    )


def build_success_payload(document: PolicyDocument, *, config: PolicyCostConfig) -> dict[str, Any]:
    priced = price_workers(
        document.workers,
        has_dental_care=document.has_dental_care,
        company_percentage=document.company_percentage,
        config=config,
    )
    return {
        "message": SUCCESS_MESSAGE,
        "input": document.raw,
        "data": {
            "policy": {
                "workers": priced,
                "total": summarize_costs(priced).to_dict(),
            }
        },
    }


def service_unavailable_response() -> PolicyResponse:
    return PolicyResponse(status_code=503, body=render_body({"message": SERVICE_UNAVAILABLE_MESSAGE}))


class PolicyAggregator:
    def __init__(self, *, source: PolicySource, config: PolicyCostConfig) -> None:
        self.source = source
        self.config = config

    def handle_policy_request(self) -> PolicyResponse:
        payload = self.source.fetch_policy_document()
        if payload is None:
            LOGGER.warning("policy document unavailable; answering 503")
            return service_unavailable_response()

        document = PolicyDocument.from_payload(payload)
        body = build_success_payload(document, config=self.config)
        total = body["data"]["policy"]["total"]
        LOGGER.info(
            "policy priced workers=%s company_total=%s workers_total=%s",
            len(document.workers),
            total["company"],
            total["workers"],
        )
        return PolicyResponse(status_code=200, body=render_body(body))
