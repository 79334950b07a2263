"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApodError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class FetchError(ApodError):
    """The upstream APOD API failed (network, timeout, bad status or body)."""

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message, status_code=502)
        self.upstream_status = upstream_status


class InvalidDateError(ApodError):
    def __init__(self, date: str):
        super().__init__(f"Invalid date: {date!r}. Expected YYYY-MM-DD", status_code=400)


class ApodNotFoundError(ApodError):
    def __init__(self, date: str):
        super().__init__(f"No picture available for {date}", status_code=404)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(FetchError)
    async def handle_fetch_error(_request: Request, exc: FetchError):
        logger.warning("Upstream fetch failed: %s", exc)
        return JSONResponse(
            {"error": str(exc), "upstream_status": exc.upstream_status},
            status_code=exc.status_code,
        )

    @app.exception_handler(ApodError)
    async def handle_apod_error(_request: Request, exc: ApodError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
