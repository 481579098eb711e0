"""Mapping of errors to HTTP responses.

Every error answers with the same envelope:

    {"error": {"message": "...", "code": "NOT_FOUND"}}
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from forum.config import Settings
from forum.domain.error import (
    DomainError,
    ForbiddenError,
    NotFoundError,
    StorageError,
    ValidationError,
)

_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "VALIDATION_ERROR",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "INTERNAL_ERROR",
}


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    """Build the JSON error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "code": code}},
    )


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Install exception handlers that translate errors to HTTP answers.

    Args:
        app: FastAPI application
        settings: Application settings; ``debug`` exposes storage details
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR"
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(status.HTTP_404_NOT_FOUND, str(exc), "NOT_FOUND")

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        return error_response(status.HTTP_403_FORBIDDEN, str(exc), "FORBIDDEN")

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        logfire.error("Storage failure", path=request.url.path, error=str(exc))
        message = "A storage error occurred"
        if settings.debug:
            message = f"{message}: {exc}"
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, message, "STORAGE_ERROR"
        )

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError):
        logfire.error("Unhandled domain error", path=request.url.path, error=str(exc))
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), "INTERNAL_ERROR"
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            location = ".".join(str(part) for part in errors[0].get("loc", ()))
            message = f"{location}: {errors[0].get('msg', message)}"
        return error_response(
            status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR"
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
        return error_response(exc.status_code, str(exc.detail), code)
