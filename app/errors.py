"""
API error taxonomy and the FastAPI exception handlers that render it.

Handlers and dependencies raise these; nothing else decides status codes or
response shapes.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .validation import format_errors

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Something went wrong!"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthenticated(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized, no token."


class InvalidCredentials(APIError):
    # Same status and message whether the email or the password was wrong
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials."


class Conflict(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists."


class NotFound(APIError):
    """Record absent or owned by someone else; callers cannot tell which."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found."


class ValidationFailed(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed."

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__()


def _validation_response(errors: list[dict[str, str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": "error", "message": ValidationFailed.message, "errors": errors},
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    if isinstance(exc, ValidationFailed):
        return _validation_response(exc.errors)
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _validation_response(format_errors(exc.errors()))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": APIError.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
