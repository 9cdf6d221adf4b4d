"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from food_expiry_tracker.api.auth import router as auth_router
from food_expiry_tracker.api.awareness import router as awareness_router
from food_expiry_tracker.api.foods import router as foods_router
from food_expiry_tracker.app_logging import configure_logging
from food_expiry_tracker.config import parse_allowed_origins
from food_expiry_tracker.containers import AppContainer
from food_expiry_tracker.domain.errors import FoodTrackerError, Unauthenticated


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Food Expiry Tracker API", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.client_origin),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(foods_router)
    app.include_router(awareness_router)

    @app.exception_handler(FoodTrackerError)
    async def handle_domain_error(
        request: Request, exc: FoodTrackerError
    ) -> JSONResponse:
        headers = None
        if isinstance(exc, Unauthenticated):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(
            "Rejected malformed request",
            extra={"path": request.url.path, "errors": exc.errors()},
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"error": "Something went wrong"})

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Food Expiry Tracker Server is Running..."

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
