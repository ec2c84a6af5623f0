# This file defines the API error taxonomy and the handlers that render it.
# Every failure leaves the service as the same `{success: false, ...}` envelope.
# Unexpected exceptions are logged with a traceback and answered with an opaque message.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

LOGGER = logging.getLogger("api")


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Missing, malformed or duplicate input."""

    def __init__(
        self,
        message: str,
        *,
        errors: list[str] | None = None,
        error_code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(
            status_code=400,
            error_code=error_code,
            message=message,
            details=list(errors) if errors else None,
        )

    @property
    def errors(self) -> list[str]:
        return list(self.details or [])

    @classmethod
    def missing_fields(cls, fields: list[str], message: str = "Validation failed") -> ValidationError:
        return cls(
            message,
            errors=[f"{field} is required" for field in fields],
        )

    @classmethod
    def duplicate(cls, message: str) -> ValidationError:
        return cls(message, error_code="DUPLICATE_RESOURCE")

    @classmethod
    def image_required(cls, message: str) -> ValidationError:
        return cls(message, error_code="IMAGE_REQUIRED")


class NotFoundError(APIError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=404, error_code="NOT_FOUND", message=message)


class UploadError(APIError):
    def __init__(self, message: str = "Error uploading image", *, reason: str | None = None) -> None:
        super().__init__(status_code=500, error_code="UPLOAD_FAILED", message=message, details=reason)


def _error_body(
    *, error_code: str, message: str, errors: list[str] | None = None, error: str | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "success": False,
        "message": message,
        "error_code": error_code,
    }
    if errors:
        body["errors"] = errors
    if error:
        body["error"] = error
    return body


REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})


def _format_request_errors(exc: RequestValidationError) -> list[str]:
    messages: list[str] = []
    for item in exc.errors():
        loc = list(item.get("loc", ()))
        # Only the leading element names the request part; later ones are field names.
        if loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
        location = [str(part) for part in loc]
        field = ".".join(location) or "request"
        messages.append(f"{field}: {item.get('msg', 'invalid value')}")
    return messages


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        errors = exc.details if isinstance(exc.details, list) else None
        error = exc.details if isinstance(exc.details, str) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                error_code=exc.error_code,
                message=exc.message,
                errors=errors,
                error=error,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                error_code="VALIDATION_ERROR",
                message="Validation error",
                errors=_format_request_errors(exc),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception(
            "Unhandled error on %s %s (request_id=%s)",
            request.method,
            request.url.path,
            getattr(request.state, "request_id", "unknown"),
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                error_code="INTERNAL_SERVER_ERROR",
                message="Internal server error",
            ),
        )
