# This file defines policy cost endpoint schemas for the success and unavailable bodies.
# It exists so the pretty-printed response contract is documented in OpenAPI and checkable in tests.
# Worker and policy models allow extra fields because passthrough worker attributes are returned untouched.
# The route itself serves the rendered body verbatim; these models describe it rather than produce it.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CostSplitV1(BaseModel):
    company: float
    worker: float


class PolicyTotalV1(BaseModel):
    company: float
    workers: float


class WorkerV1(BaseModel):
    model_config = ConfigDict(extra="allow")

    age: int
    childs: int


class PricedWorkerV1(WorkerV1):
    cost: CostSplitV1


class PolicyInputV1(BaseModel):
    model_config = ConfigDict(extra="allow")

    workers: list[WorkerV1]
    has_dental_care: bool
    company_percentage: float


class PricedPolicyV1(BaseModel):
    workers: list[PricedWorkerV1]
    total: PolicyTotalV1


class PolicyDataV1(BaseModel):
    policy: PricedPolicyV1


class PolicyCostResponseV1(BaseModel):
    message: str
    input: PolicyInputV1
    data: PolicyDataV1


class ServiceUnavailableResponseV1(BaseModel):
    message: str
