"""
Application error taxonomy and its HTTP mapping.

Every error carries a fixed status code and a user-facing message.  The
handlers registered by ``register_exception_handlers`` turn them into a
``{"message": ...}`` JSON body.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from api.middleware import request_id_of
from database.store import StoreError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something Went Wrong"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username already exists"


class InvalidCredentialsError(AppError):
    # 400 rather than 401 so the response does not hint which field was wrong
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username or password is incorrect"


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to modify this recipe"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Recipe not found"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something Went Wrong"


def register_exception_handlers(app: FastAPI) -> None:
    """Map application and store errors to ``{"message"}`` responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s %s failed: %s",
                request_id_of(request), request.method, request.url.path, exc.message,
            )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "[%s] Store failure on %s %s: %s",
            request_id_of(request), request.method, request.url.path, exc,
        )
        return JSONResponse(
            status_code=InternalError.status_code,
            content={"message": InternalError.default_message},
        )
