"""FastAPI application factory and setup."""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from catalog.domain.exceptions import (
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure import bootstrap
from catalog.infrastructure.config import Settings, get_settings
from catalog.infrastructure.http.routers import health, products


def create_app(
    repository: ProductRepository | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the HTTP application.

    When no repository is given, the configured one is built at startup
    (failing startup if the store is unreachable) and closed on shutdown.
    An injected repository is left open; its owner closes it.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.repository is None
        if owned:
            app.state.repository = bootstrap.product_repository(settings)
        logger.info("Product catalog ready ({} backend)", settings.db_type)
        try:
            yield
        finally:
            if owned:
                app.state.repository.close()
                app.state.repository = None

    app = FastAPI(title="Product Catalog", lifespan=lifespan)
    app.state.settings = settings
    app.state.repository = repository

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    _register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router, prefix="/v1/products", tags=["products"])
    return app


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request body on {}: {}", request.url.path, exc.errors())
        return _message(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _message(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return _message(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(InfrastructureError)
    async def store_failure(request: Request, exc: InfrastructureError) -> JSONResponse:
        logger.error("Store failure on {} {}: {}", request.method, request.url.path, exc)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
