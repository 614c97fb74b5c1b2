"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import air_quality, exposure, health, routes
from .config import settings
from .services.errors import RoutePlanningError

INVALID_REQUEST_MESSAGE = "Invalid request"

logger = logging.getLogger(__name__)


async def route_planning_error_handler(request: Request, exc: RoutePlanningError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %d validation errors", request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": INVALID_REQUEST_MESSAGE},
    )


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.app_name)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_exception_handler(RoutePlanningError, route_planning_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    @app.get("/")
    def root():
        return {
            "success": True,
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    app.include_router(exposure.router, prefix=settings.api_prefix)
    app.include_router(air_quality.router, prefix=settings.api_prefix)
    return app


app = create_app()
