"""
FastAPI application entry point for the prayer board service.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from prayerboard.config import Settings, get_settings
from prayerboard.db import DbClient, DuplicateRecordError, MissingParentError
from prayerboard.dependencies import ensure_db_client
from prayerboard.inspirations import seed_inspirations
from prayerboard.logging_config import RequestLogger, setup_logging
from prayerboard.routes import router
from prayerboard.schemas import ErrorResponse

logger = logging.getLogger(__name__)
request_logger = RequestLogger(logging.getLogger("prayerboard.requests"))


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    return str(errors[0].get("msg") or "Invalid request")


def run_startup_tasks(db: DbClient, settings: Settings) -> None:
    """Connectivity check and inspiration auto-seed. Never fatal."""
    if db.ping():
        logger.info("%s storage connectivity: OK", db.storage_name)
    else:
        logger.error("%s storage connectivity: FAILED", db.storage_name)

    if not settings.seed_inspirations:
        return
    try:
        if db.get_daily_inspiration() is None:
            seed_inspirations(db)
    except Exception:
        logger.warning("Could not auto-seed daily inspirations", exc_info=True)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return _error(400, _first_validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(DuplicateRecordError)
    async def duplicate_record_handler(request: Request, exc: DuplicateRecordError):
        return _error(400, str(exc))

    @app.exception_handler(MissingParentError)
    async def missing_parent_handler(request: Request, exc: MissingParentError):
        return _error(404, "Not found")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s", request.method, request.url.path
        )
        return _error(500, "Internal server error")


def create_app(
    settings: Optional[Settings] = None, db: Optional[DbClient] = None
) -> FastAPI:
    """
    Build the FastAPI app. Storage is created on first use (startup or the
    first request) unless `db` is passed in.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        run_startup_tasks(ensure_db_client(app), settings)
        yield

    app = FastAPI(title="Prayer Board API", version="0.1.0", lifespan=lifespan)
    app.state.db = db
    app.state.settings = settings

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        # Unhandled errors propagate past this middleware and become a 500.
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            if request.url.path.startswith(settings.api_prefix):
                request_logger.log_request(
                    request.method,
                    request.url.path,
                    status_code,
                    (time.perf_counter() - start) * 1000,
                )

    register_exception_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
