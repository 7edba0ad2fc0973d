# This file defines the policy cost endpoint under the versioned API path.
# It exists so HTTP clients receive exactly the status code and body the serverless handler returns.
# The body is pre-rendered by the aggregator and served verbatim to keep key order and number formatting stable.
# Source faults are left to the global error handlers.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from src.api.dependencies import get_policy_aggregator
from src.api.metrics import POLICY_RESPONSES_TOTAL
from src.api.schemas.common import ErrorResponse
from src.api.schemas.policy_schemas import PolicyCostResponseV1, ServiceUnavailableResponseV1
from src.policy_cost.aggregator import PolicyAggregator

router = APIRouter(prefix="/policy", tags=["policy"])
AggregatorDep = Annotated[PolicyAggregator, Depends(get_policy_aggregator)]


@router.get(
    "",
    response_class=Response,
    responses={
        200: {"model": PolicyCostResponseV1, "description": "Per-worker cost split and totals."},
        502: {"model": ErrorResponse, "description": "The policy source could not be reached."},
        503: {"model": ServiceUnavailableResponseV1, "description": "The policy source returned no data."},
    },
)
def policy_cost(aggregator: AggregatorDep) -> Response:
    result = aggregator.handle_policy_request()
    POLICY_RESPONSES_TOTAL.labels(status_code=str(result.status_code)).inc()
    return Response(content=result.body, status_code=result.status_code, media_type="application/json")
