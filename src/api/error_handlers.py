# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same error shape with request trace fields.
# The handlers translate policy source faults, validation, HTTP, and unexpected failures into safe client messages.
# Centralized error handling prevents stack traces from leaking in production responses.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.metrics import POLICY_SOURCE_FAILURES_TOTAL
from src.policy_cost.cost_rule import InvalidCompanyPercentageError
from src.policy_cost.policy_source import PolicySourceError

LOGGER = logging.getLogger("api")


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_body(
    *, request: Request, error_code: str, message: str, details: Any | None = None
) -> dict[str, Any]:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "request_id": _request_id(request),
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(PolicySourceError)
    async def policy_source_error_handler(request: Request, exc: PolicySourceError) -> JSONResponse:
        LOGGER.error("policy source failed request_id=%s: %s", _request_id(request), exc)
        POLICY_SOURCE_FAILURES_TOTAL.inc()
        return JSONResponse(
            status_code=502,
            content=_error_body(
                request=request,
                error_code="POLICY_SOURCE_UNAVAILABLE",
                message="The policy source could not be reached.",
            ),
        )

    @app.exception_handler(InvalidCompanyPercentageError)
    async def company_percentage_error_handler(
        request: Request, exc: InvalidCompanyPercentageError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=_error_body(
                request=request,
                error_code="INVALID_COMPANY_PERCENTAGE",
                message=str(exc),
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=_error_body(
                request=request,
                error_code="VALIDATION_ERROR",
                message="Invalid request parameters.",
                details=exc.errors(),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.error("unhandled error request_id=%s: %r", _request_id(request), exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )
