"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from stayfocus.api.reminders import router as reminders_router
from stayfocus.api.sleep import router as sleep_router
from stayfocus.app_logging import configure_logging
from stayfocus.containers import AppContainer
from stayfocus.domain.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StayFocusError,
)

_ERROR_STATUS: list[tuple[type[StayFocusError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidInputError, status.HTTP_422_UNPROCESSABLE_ENTITY),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(sleep_router)
    app.include_router(reminders_router)

    @app.exception_handler(StayFocusError)
    async def domain_error(request: Request, exc: StayFocusError) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info(
            "Request rejected: path=%s status=%s error=%s",
            request.url.path,
            status_code,
            exc,
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: StayFocusError) -> int:
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
