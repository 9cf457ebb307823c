"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.activities import router as activities_router
from calorie_tracker.api.admin import router as admin_router
from calorie_tracker.api.auth import router as auth_router
from calorie_tracker.api.foods import router as foods_router
from calorie_tracker.api.meals import router as meals_router
from calorie_tracker.api.users import router as users_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import (
    AccessDeniedError,
    AuthenticationError,
    CalorieTrackerError,
    ConflictError,
    InvalidFoodDataError,
    InvalidRequestError,
    MissingProfileDataError,
    NotFoundError,
)

ERROR_STATUS_CODES: dict[type[CalorieTrackerError], int] = {
    InvalidFoodDataError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    MissingProfileDataError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}


def error_status(exc: CalorieTrackerError) -> int:
    """Return the HTTP status for a domain error."""
    for error_type in type(exc).__mro__:
        code = ERROR_STATUS_CODES.get(error_type)
        if code is not None:
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.bootstrap_service.run()
        except Exception:
            logger.exception("Failed to bootstrap admin account and seed foods")
        yield

    app = FastAPI(title="Calorie Tracker", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(CalorieTrackerError)
    async def handle_domain_error(
        request: Request, exc: CalorieTrackerError
    ) -> JSONResponse:
        code = error_status(exc)
        if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=code, content={"detail": exc.message})

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(foods_router)
    app.include_router(meals_router)
    app.include_router(activities_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
