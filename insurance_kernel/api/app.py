"""
FastAPI application factory.

``create_app`` wires settings, logging, the database engine and the clock
into one application and maps kernel exceptions onto HTTP responses:

    NotFoundError          -> 404
    InvalidInputError      -> 400
    request body/path type -> 400 (INVALID_INPUT)
    InsuranceKernelError   -> 500

Every response body for an error is ``{"code", "message", "details"}``.
"""

from __future__ import annotations

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from insurance_kernel import __version__
from insurance_kernel.api.endpoints import clients, contracts
from insurance_kernel.config import KernelSettings, load_settings
from insurance_kernel.db.engine import create_tables, init_engine_from_url
from insurance_kernel.domain.clock import Clock, SystemClock
from insurance_kernel.exceptions import (
    InsuranceKernelError,
    InvalidInputError,
    NotFoundError,
)
from insurance_kernel.logging_config import LogContext, configure_logging, get_logger

logger = get_logger("api")


def _error(status_code: int, exc: InsuranceKernelError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "code": exc.code,
            "message": str(exc),
            "details": getattr(exc, "field_errors", []),
        },
    )


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        logger.info("request_not_found", extra={"code": exc.code, "path": request.url.path})
        return _error(404, exc)

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError):
        logger.info("request_invalid", extra={"code": exc.code, "path": request.url.path})
        return _error(400, exc)

    @app.exception_handler(InsuranceKernelError)
    async def kernel_error(request: Request, exc: InsuranceKernelError):
        logger.error("request_failed", exc_info=exc, extra={"path": request.url.path})
        return _error(500, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation(request: Request, exc: RequestValidationError):
        field_errors = [
            {
                "field": ".".join(str(p) for p in err["loc"] if p not in ("body", "path", "query")),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return _error(400, InvalidInputError(field_errors))


def create_app(
    settings: KernelSettings | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Defaults to ``load_settings()`` (YAML + environment).
        clock: Source of "today".  Defaults to SystemClock.
    """
    settings = settings or load_settings()

    configure_logging(level=settings.log_level)
    init_engine_from_url(
        settings.database_url,
        echo=settings.echo_sql,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
    )
    create_tables()

    app = FastAPI(
        title="Insurance Kernel API",
        description="Clients, contracts and active-contract aggregation",
        version=__version__,
    )
    app.state.settings = settings
    app.state.clock = clock or SystemClock()

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        with LogContext.bind(request_id=request_id):
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    _register_exception_handlers(app)
    app.include_router(clients.router, prefix="/api")
    app.include_router(contracts.router, prefix="/api")

    logger.info("api_initialized", extra={"version": __version__})
    return app
