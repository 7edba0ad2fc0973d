# This file defines the value types passed between the policy source, the cost rule, and the response layer.
# It exists so cost splits, totals, and responses have one explicit shape across entry points.
# Every type is immutable; transformations build new values instead of editing old ones.
# Worker records stay plain mappings so passthrough fields survive untouched.

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CostSplit:
    """Share of one worker's policy cost paid by the company and by the worker."""

    company: float
    worker: float

    @property
    def total(self) -> float:
        return self.company + self.worker

    def to_dict(self) -> dict[str, float]:
        return {"company": self.company, "worker": self.worker}


@dataclass(frozen=True)
class PolicyTotal:
    company: float
    workers: float

    def to_dict(self) -> dict[str, float]:
        return {"company": self.company, "workers": self.workers}


@dataclass(frozen=True)
class PolicyDocument:
    """The `policy` block of the remote document, plus the raw mapping it came from."""

    workers: tuple[Mapping[str, Any], ...]
    has_dental_care: bool
    company_percentage: float
    raw: Mapping[str, Any]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> PolicyDocument:
        # Missing keys are not validated and surface as KeyError/TypeError.
        policy = payload["policy"]
        return cls(
            workers=tuple(policy["workers"]),
            has_dental_care=policy["has_dental_care"],
            company_percentage=policy["company_percentage"],
            raw=policy,
        )


@dataclass(frozen=True)
class PolicyResponse:
    status_code: int
    body: str

    def to_invocation_response(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body}


def priced_worker(worker: Mapping[str, Any], cost: CostSplit) -> dict[str, Any]:
    """Copy a worker record and attach its cost; an existing `cost` key keeps its position."""

    priced = dict(worker)
    priced["cost"] = cost.to_dict()
    return priced


def worker_costs(priced_workers: Sequence[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    return [worker["cost"] for worker in priced_workers]
