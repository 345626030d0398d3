"""Map domain and validation errors to the JSON error body."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions import AppError, UnauthorizedError
from app.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        error=error,
        message=message,
        details=details,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers,
    )


def _field_name(loc: tuple) -> str | None:
    # Drop the leading "body" / "query" segment pydantic adds
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts) or None


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers so every error leaves the API in the same shape."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        logger.warning(
            "%s %s -> %d %s: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.error,
            exc.message,
        )
        details = [ErrorDetail(**d) for d in exc.details] if exc.details else None
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return _error_response(request, exc.status_code, exc.error, exc.message, details, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = [
            ErrorDetail(field=_field_name(tuple(err.get("loc", ()))), message=err.get("msg", ""))
            for err in exc.errors()
        ]
        logger.warning(
            "%s %s -> 400 validation failed on %s",
            request.method,
            request.url.path,
            [d.field for d in details],
        )
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "ValidationError",
            "Request validation failed",
            details,
        )

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "InternalServerError",
            "An unexpected error occurred",
        )
