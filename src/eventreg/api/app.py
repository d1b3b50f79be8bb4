"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventreg import __version__
from eventreg.api.dependencies import close_services, init_services
from eventreg.api.models import APIResponse
from eventreg.api.routes import admin, dashboard, payments, registrations
from eventreg.api.routes import status as status_routes
from eventreg.config import Settings
from eventreg.logging import get_logger
from eventreg.registry import (
    PaymentNotFoundError,
    RegistrationCancelledError,
    RegistrationNotFoundError,
    RegistryError,
    StoreError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from eventreg.cache import StatusCache

logger = get_logger("api")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    init_services(app.state.settings, cache=getattr(app.state, "cache", None))
    yield
    close_services()


def create_app(
    settings: Settings | None = None, cache: StatusCache | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. Defaults to Settings.from_env().
        cache: Optional cache overriding the one built from settings.
    """
    app = FastAPI(
        title="eventreg API",
        description="Event registration and payment tracking",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else Settings.from_env()
    app.state.cache = cache

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RegistrationNotFoundError)
    async def registration_not_found_handler(
        _request: Request, _exc: RegistrationNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, "Registration not found")

    @app.exception_handler(PaymentNotFoundError)
    async def payment_not_found_handler(
        _request: Request, _exc: PaymentNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, "Payment not found")

    @app.exception_handler(RegistrationCancelledError)
    async def registration_cancelled_handler(
        _request: Request, _exc: RegistrationCancelledError
    ) -> JSONResponse:
        return _error_response(status.HTTP_409_CONFLICT, "Registration is cancelled")

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_request: Request, exc: ValidationError) -> JSONResponse:
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(RegistryError)
    async def registry_error_handler(_request: Request, exc: RegistryError) -> JSONResponse:
        logger.error("Unhandled registry error: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    # Include routers
    app.include_router(registrations.router, prefix="/api/v1")
    app.include_router(status_routes.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")
    app.include_router(payments.router, prefix="/api/v1")
    app.include_router(dashboard.router, prefix="/api/v1")

    return app
