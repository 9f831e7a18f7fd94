"""FastAPI application instance and startup hooks."""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from contribcalc.core import get_logger, get_settings
from contribcalc.core.errors import ContribCalcError
from contribcalc.core.log import init_logging
from contribcalc.core.security import get_security_provider
from contribcalc.db import create_schema, get_default_sessionmaker
from contribcalc.middleware import AuthMiddleware
from contribcalc.routers import (
    auth_router,
    calculate_router,
    cities_router,
    dashboard_router,
    results_router,
    salaries_router,
)

LOGGER = get_logger(__name__)


async def handle_domain_error(request: Request, exc: ContribCalcError) -> JSONResponse:
    if exc.status_code >= 500:
        LOGGER.error("%s on %s: %s", exc.code, request.url.path, exc.message)
    else:
        LOGGER.info("%s on %s: %s", exc.code, request.url.path, exc.message)
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    init_logging(level=settings.log_level, log_dir=settings.log_dir)

    app = FastAPI(title="Contribution Calculator", version="0.1.0")
    app.add_middleware(AuthMiddleware, security_provider=get_security_provider())
    app.add_exception_handler(ContribCalcError, handle_domain_error)  # type: ignore[arg-type]

    app.include_router(auth_router)
    app.include_router(cities_router)
    app.include_router(salaries_router)
    app.include_router(calculate_router)
    app.include_router(results_router)
    app.include_router(dashboard_router)

    @app.on_event("startup")
    def ensure_schema() -> None:
        if not settings.create_schema:
            return
        engine = get_default_sessionmaker().kw["bind"]
        try:
            create_schema(engine)
        except Exception:  # pragma: no cover - fail fast on startup issues
            LOGGER.exception("Failed to create database schema")
            raise

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    LOGGER.info("FastAPI application initialised")
    return app


app = create_app()
