# This file defines runtime configuration for the policy cost service.
# It exists so the handler, the HTTP API, and the CLI job all use one consistent policy surface.
# The loader merges YAML defaults with environment overrides and validates the cost table at load time.
# Keeping these settings in one place makes cost calculations reproducible and easier to audit.

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from src.policy_cost.cost_rule import (
    DEFAULT_COST_TABLE,
    DEFAULT_MAX_COVERED_AGE,
    PERCENTAGE_MODE_PASS_THROUGH,
    VALID_COMPANY_PERCENTAGE_MODES,
    CostTable,
    CostTier,
)

DEFAULT_SOURCE_URL = "https://dn8mlk7hdujby.cloudfront.net/interview/insurance/policy"
DEFAULT_SOURCE_TIMEOUT_SECONDS = 10.0
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "policy_cost.yaml"


def _load_yaml(path: str | Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config at {path} must be a mapping, got: {type(loaded).__name__}")
    return dict(loaded)


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_float(name: str, default: float | None = None) -> float | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return float(value)


def _env_int(name: str, default: int | None = None) -> int | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


def _as_cost_tier(value: Any, field_name: str) -> CostTier:
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a mapping with health_life and dental costs")
    try:
        tier = CostTier(health_life=float(value["health_life"]), dental=float(value["dental"]))
    except KeyError as exc:
        raise ValueError(f"{field_name} is missing cost {exc.args[0]!r}") from exc
    if tier.health_life < 0 or tier.dental < 0:
        raise ValueError(f"{field_name} costs must be nonnegative")
    return tier


def _as_cost_table(tiers_cfg: Any, fallback_cfg: Any) -> CostTable:
    if tiers_cfg is None and fallback_cfg is None:
        return DEFAULT_COST_TABLE
    if tiers_cfg is None or fallback_cfg is None:
        raise ValueError("cost_tiers and fallback_tier must be configured together")
    if not isinstance(tiers_cfg, dict):
        raise ValueError("cost_tiers must be a mapping of children count -> tier")

    tiers: dict[int, CostTier] = {}
    for raw_childs, raw_tier in tiers_cfg.items():
        try:
            childs = int(raw_childs)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"cost_tiers key must be an integer children count, got {raw_childs!r}") from exc
        tiers[childs] = _as_cost_tier(raw_tier, f"cost_tiers[{childs}]")
    return CostTable(tiers=tiers, fallback=_as_cost_tier(fallback_cfg, "fallback_tier"))


@dataclass(frozen=True)
class PolicyCostConfig:
    source_url: str
    source_timeout_seconds: float
    max_covered_age: int
    company_percentage_mode: str
    cost_table: CostTable

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_url": self.source_url,
            "source_timeout_seconds": self.source_timeout_seconds,
            "max_covered_age": self.max_covered_age,
            "company_percentage_mode": self.company_percentage_mode,
            "cost_table": self.cost_table.to_dict(),
        }


def load_policy_cost_config(
    *,
    config_path: str | Path | None = None,
    load_env: bool = True,
) -> PolicyCostConfig:
    """Load policy cost configuration from YAML and `POLICY_*` environment variables.

    An explicit `config_path` must exist. Without one, the bundled
    `configs/policy_cost.yaml` is read when present and code defaults apply otherwise.
    """

    if load_env:
        load_dotenv()

    if config_path is not None:
        cfg = _load_yaml(config_path)
    elif DEFAULT_CONFIG_PATH.exists():
        cfg = _load_yaml(DEFAULT_CONFIG_PATH)
    else:
        cfg = {}
    source_cfg = dict(cfg.get("source", {}) or {})

    source_url = str(_env_str("POLICY_SOURCE_URL", str(source_cfg.get("url", DEFAULT_SOURCE_URL))))
    source_timeout_seconds = float(
        _env_float(
            "POLICY_SOURCE_TIMEOUT_SECONDS",
            float(source_cfg.get("timeout_seconds", DEFAULT_SOURCE_TIMEOUT_SECONDS)),
        )
    )
    max_covered_age = _env_int("POLICY_MAX_COVERED_AGE", int(cfg.get("max_covered_age", DEFAULT_MAX_COVERED_AGE)))
    company_percentage_mode = str(
        _env_str(
            "POLICY_COMPANY_PERCENTAGE_MODE",
            str(cfg.get("company_percentage_mode", PERCENTAGE_MODE_PASS_THROUGH)),
        )
    )
    cost_table = _as_cost_table(cfg.get("cost_tiers"), cfg.get("fallback_tier"))

    if not source_url.startswith(("http://", "https://")):
        raise ValueError(f"POLICY_SOURCE_URL must be an http(s) URL, got: {source_url!r}")
    if source_timeout_seconds <= 0:
        raise ValueError("source_timeout_seconds must be > 0")
    if max_covered_age is None or max_covered_age < 0:
        raise ValueError("max_covered_age must be nonnegative")
    if company_percentage_mode not in VALID_COMPANY_PERCENTAGE_MODES:
        raise ValueError(
            "POLICY_COMPANY_PERCENTAGE_MODE must be one of "
            f"{sorted(VALID_COMPANY_PERCENTAGE_MODES)}, got {company_percentage_mode}"
        )

    return PolicyCostConfig(
        source_url=source_url,
        source_timeout_seconds=source_timeout_seconds,
        max_covered_age=max_covered_age,
        company_percentage_mode=company_percentage_mode,
        cost_table=cost_table,
    )


@lru_cache(maxsize=1)
def get_policy_cost_config() -> PolicyCostConfig:
    """Cached accessor for policy cost config."""

    return load_policy_cost_config()
