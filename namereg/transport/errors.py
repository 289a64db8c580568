"""
Error Envelope

Maps the service's exception taxonomy to HTTP responses:

- ValidationError / malformed request body -> 400
- StorageError -> 500 (translated to ApiError by the routes)
- BackendUnavailable -> 503
- BackendError -> 500
- ApiError -> its own status

Every error body has the shape {"error": str, "message"?: str}.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from namereg.kv import BackendError, BackendUnavailable


class ApiError(Exception):
    """An error with a fixed HTTP status and client-facing message."""

    status_code = 500

    def __init__(self, error: str, message: str | None = None, status_code: int | None = None):
        super().__init__(error)
        self.error = error
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """A required field is missing or malformed."""

    status_code = 400


def error_body(error: str, message: str | None = None) -> dict[str, str]:
    body = {"error": error}
    if message:
        body["message"] = message
    return body


def install_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers on the application."""

    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.error, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content=error_body("Invalid request body", details),
        )

    @app.exception_handler(BackendUnavailable)
    async def _backend_unavailable(request: Request, exc: BackendUnavailable) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content=error_body("Redis not available", str(exc)),
        )

    @app.exception_handler(BackendError)
    async def _backend_error(request: Request, exc: BackendError) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=error_body("Redis operation failed", str(exc)),
        )
