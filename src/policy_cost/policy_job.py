# This module runs one policy cost calculation from the command line.
# It exists so operators can check the remote document and the computed split without deploying the API.
# The job prints the same body the handler returns and exits non-zero when the source has no data.
# Optional flags override the configured source URL and timeout for ad hoc runs.

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from src.common.logging import configure_logging
from src.policy_cost.handler import build_policy_aggregator
from src.policy_cost.policy_config import load_policy_cost_config

LOGGER = logging.getLogger("policy_cost")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute company and worker policy costs")
    parser.add_argument("--config", default=None, help="Path to a policy cost YAML config")
    parser.add_argument("--url", default=None, help="Override the policy source URL")
    parser.add_argument("--timeout", type=float, default=None, help="Override the source timeout in seconds")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")
    args = parser.parse_args()
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be > 0")
    return args


def main() -> int:
    args = parse_args()
    configure_logging(args.log_level)
    cfg = load_policy_cost_config(config_path=args.config)
    if args.url:
        cfg = replace(cfg, source_url=args.url)
    if args.timeout is not None:
        cfg = replace(cfg, source_timeout_seconds=args.timeout)

    response = build_policy_aggregator(cfg).handle_policy_request()
    LOGGER.info("policy job completed status_code=%s", response.status_code)
    print(response.body)
    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    raise SystemExit(main())
