from __future__ import annotations

import os
import time

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from waffle.api.errors import ApiErrorCode, ApiException, make_error_payload
from waffle.api.router import api_router
from waffle.core.config import get_settings
from waffle.core.logging import configure_logging
from waffle.core.middleware import RequestContextMiddleware

logger = structlog.get_logger(__name__)


def _request_id_from_request(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    return request_id if isinstance(request_id, str) and request_id else "unknown"


def _error_response(
    request: Request,
    status_code: int,
    code: ApiErrorCode | str,
    message: str,
    details: object,
) -> JSONResponse:
    request_id = _request_id_from_request(request)
    return JSONResponse(
        status_code=status_code,
        headers={"X-Request-ID": request_id},
        content={
            **make_error_payload(code=code, message=message, details=details),
            "request_id": request_id,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = jsonable_encoder(exc.errors())
        logger.warning(
            "request_validation_error",
            method=request.method,
            path=request.url.path,
            details=details,
        )
        return _error_response(request, 422, ApiErrorCode.VALIDATION_ERROR, "Invalid request", details)

    @app.exception_handler(ApiException)
    async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
        logger.warning(
            "api_exception",
            method=request.method,
            path=request.url.path,
            status_code=exc.status_code,
            code=exc.code,
            details=exc.details,
        )
        return _error_response(request, exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        logger.warning(
            "http_exception",
            method=request.method,
            path=request.url.path,
            status_code=exc.status_code,
            detail=message,
        )
        return _error_response(request, exc.status_code, ApiErrorCode.HTTP_ERROR, message, [])

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            method=request.method,
            path=request.url.path,
        )
        return _error_response(request, 500, ApiErrorCode.INTERNAL_ERROR, "Internal server error", [])


def create_app() -> FastAPI:
    initial_log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(initial_log_level)
    settings = get_settings()
    if settings.log_level.upper() != initial_log_level.upper():
        configure_logging(settings.log_level)

    app = FastAPI(title="Waffle Backend", version="0.1.0")
    app.state.process_started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    logger.info("app_initialized", service=settings.service_name, env=settings.env)
    return app


app = create_app()
