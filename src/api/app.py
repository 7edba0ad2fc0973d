# This file assembles the HTTP face of the policy cost service.
# The app serves the policy route under the configured version path next to liveness, version, and metrics.
# Every response carries `x-request-id` and `x-response-time-ms`; metrics are recorded per route template.

from __future__ import annotations

import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import ApiConfig, get_api_config
from src.api.error_handlers import register_error_handlers
from src.api.metrics import (
    HTTP_INFLIGHT_REQUESTS,
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_TOTAL,
    route_label,
)
from src.api.routers.health import router as health_router
from src.api.routers.policy import router as policy_router
from src.common.logging import configure_logging

DESCRIPTION = (
    "Computes the employer and employee share of an insurance policy for every worker "
    "in the remote policy document, plus policy totals."
)


async def track_request(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Tag the request with an ID, time it, and record it under its route template."""

    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id

    started = time.perf_counter()
    status_code = 500
    inflight = HTTP_INFLIGHT_REQUESTS.labels(method=request.method)
    inflight.inc()
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["x-request-id"] = request_id
        response.headers["x-response-time-ms"] = f"{(time.perf_counter() - started) * 1000.0:.2f}"
        return response
    finally:
        inflight.dec()
        # Routing has run by now, so the matched route is on the scope.
        route = route_label(request)
        HTTP_REQUESTS_TOTAL.labels(method=request.method, route=route, status_code=str(status_code)).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=request.method, route=route).observe(
            time.perf_counter() - started
        )


def create_app(config: ApiConfig | None = None) -> FastAPI:
    configure_logging()
    config = config or get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=DESCRIPTION,
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness and version metadata."},
            {"name": "policy", "description": "Per-worker policy cost split and totals."},
        ],
    )

    if config.allowed_origins:
        # The policy route is read-only.
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_methods=["GET"],
            allow_headers=["*"],
            expose_headers=["x-request-id", "x-response-time-ms"],
        )
    app.middleware("http")(track_request)

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(policy_router, prefix=config.api_version_path)
    return app


app = create_app()
