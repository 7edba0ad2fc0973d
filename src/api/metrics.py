# This file declares the Prometheus metrics exported at `/metrics`.
# HTTP metrics are labelled by route template, never by raw path, so unknown URLs cannot grow label sets.
# Policy metrics count what the policy route answered and how often the remote source failed.

from __future__ import annotations

from fastapi import Request
from prometheus_client import Counter, Gauge, Histogram

UNMATCHED_ROUTE = "unmatched"

HTTP_REQUESTS_TOTAL = Counter(
    "policy_api_http_requests_total",
    "HTTP requests handled, by route template and status code.",
    ["method", "route", "status_code"],
)
HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "policy_api_http_request_duration_seconds",
    "HTTP request duration in seconds, by route template.",
    ["method", "route"],
    # One remote fetch dominates; the last buckets sit around the source timeout.
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 15),
)
HTTP_INFLIGHT_REQUESTS = Gauge(
    "policy_api_http_inflight_requests",
    "HTTP requests currently being processed.",
    ["method"],
)
POLICY_RESPONSES_TOTAL = Counter(
    "policy_cost_responses_total",
    "Policy cost responses produced, by status code (200 priced, 503 no data).",
    ["status_code"],
)
POLICY_SOURCE_FAILURES_TOTAL = Counter(
    "policy_source_failures_total",
    "Requests that failed because the policy source could not be read.",
)


def route_label(request: Request) -> str:
    """Template of the route that served `request`, e.g. `/api/v1/policy`."""

    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)
