# This module implements the per-worker policy cost rule.
# It exists to isolate the tiered pricing table and the company/worker split from fetching and response shaping.
# Tiers are keyed by number of children; any count without its own tier (two or more, or negative) uses the fallback tier.
# Workers older than the maximum covered age have no coverage and therefore no cost.

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from src.policy_cost.contracts import CostSplit

DEFAULT_MAX_COVERED_AGE = 65

PERCENTAGE_MODE_PASS_THROUGH = "pass_through"
PERCENTAGE_MODE_CLAMP = "clamp"
PERCENTAGE_MODE_REJECT = "reject"
VALID_COMPANY_PERCENTAGE_MODES = {
    PERCENTAGE_MODE_PASS_THROUGH,
    PERCENTAGE_MODE_CLAMP,
    PERCENTAGE_MODE_REJECT,
}


class InvalidCompanyPercentageError(ValueError):
    """Raised in reject mode when the company percentage lies outside [0, 100]."""


@dataclass(frozen=True)
class CostTier:
    """Monthly cost in UF of one tier."""

    health_life: float
    dental: float

    def total(self, has_dental_care: bool) -> float:
        cost = self.health_life
        cost += self.dental if has_dental_care else 0
        return cost


@dataclass(frozen=True)
class CostTable:
    tiers: Mapping[int, CostTier] = field(
        default_factory=lambda: {
            0: CostTier(health_life=0.279, dental=0.12),
            1: CostTier(health_life=0.4396, dental=0.1950),
        }
    )
    fallback: CostTier = CostTier(health_life=0.5599, dental=0.2480)

    def select(self, childs: int) -> CostTier:
        return self.tiers.get(childs, self.fallback)

    def to_dict(self) -> dict[str, object]:
        return {
            "tiers": {
                str(childs): {"health_life": tier.health_life, "dental": tier.dental}
                for childs, tier in sorted(self.tiers.items())
            },
            "fallback": {"health_life": self.fallback.health_life, "dental": self.fallback.dental},
        }


DEFAULT_COST_TABLE = CostTable()


def is_covered(age: int, *, max_covered_age: int = DEFAULT_MAX_COVERED_AGE) -> bool:
    return age <= max_covered_age


def resolve_company_percentage(company_percentage: float, *, mode: str = PERCENTAGE_MODE_PASS_THROUGH) -> float:
    """Apply the configured policy for company percentages outside [0, 100]."""

    if mode == PERCENTAGE_MODE_PASS_THROUGH:
        return company_percentage
    if mode == PERCENTAGE_MODE_CLAMP:
        return max(0, min(100, company_percentage))
    if mode == PERCENTAGE_MODE_REJECT:
        if math.isnan(company_percentage) or not 0 <= company_percentage <= 100:
            raise InvalidCompanyPercentageError(
                f"company_percentage must be within [0, 100], got {company_percentage!r}"
            )
        return company_percentage
    raise ValueError(f"Unsupported company percentage mode: {mode}")


def total_tier_cost(childs: int, has_dental_care: bool, *, cost_table: CostTable = DEFAULT_COST_TABLE) -> float:
    return cost_table.select(childs).total(has_dental_care)


def split_cost(total_cost: float, company_percentage: float) -> CostSplit:
    return CostSplit(
        company=total_cost * company_percentage / 100,
        worker=total_cost * (100 - company_percentage) / 100,
    )


def compute_cost(
    age: int,
    childs: int,
    has_dental_care: bool,
    company_percentage: float,
    *,
    cost_table: CostTable = DEFAULT_COST_TABLE,
    max_covered_age: int = DEFAULT_MAX_COVERED_AGE,
    percentage_mode: str = PERCENTAGE_MODE_PASS_THROUGH,
) -> CostSplit:
    """Split one worker's policy cost between company and worker.

    The result is not rounded. With the default pass-through mode a company
    percentage outside [0, 100] propagates arithmetically, so one share turns
    negative and the other exceeds the tier cost.
    """

    percentage = resolve_company_percentage(company_percentage, mode=percentage_mode)
    if not is_covered(age, max_covered_age=max_covered_age):
        return CostSplit(company=0, worker=0)
    return split_cost(total_tier_cost(childs, has_dental_care, cost_table=cost_table), percentage)
