"""
Error taxonomy shared by the library services.

Every failure a request can end in is one of these classes. Each carries the
HTTP status it maps to, and `register_exception_handlers` installs the single
place where they are turned into the `{message, data?}` response envelope.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class ServiceError(Exception):
    """
    Base exception for all service errors.

    Subclasses set `status_code` and `default_message`; instances may
    override the message and attach structured `data`.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None, data: Any = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the response envelope."""
        body: dict[str, Any] = {"message": self.message}
        if self.data is not None:
            body["data"] = self.data
        return body


# --- 401 ---
class AuthenticationError(ServiceError):
    """Missing, invalid or expired credential, or a failed login."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated."


class TokenMissing(AuthenticationError):
    default_message = "Not authenticated."


class TokenInvalid(AuthenticationError):
    default_message = "Invalid or expired token."


class InvalidCredentials(AuthenticationError):
    # Same message for unknown email and wrong password.
    default_message = "Invalid email or password."


# --- 403 ---
class AuthorizationError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized."


class NotAuthorized(AuthorizationError):
    default_message = "Not authorized."


class AccountDisabled(AuthorizationError):
    default_message = "Account is disabled."


# --- 422 ---
class ValidationError(ServiceError):
    status_code = 422
    default_message = "Validation failed."


# --- 404 ---
class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class NotFavourite(NotFoundError):
    default_message = "Book is not in favourites."


class InvalidBookReference(NotFoundError):
    default_message = "Invalid book id."


# --- 400 ---
class ConflictError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists."


class AlreadyFavourite(ConflictError):
    default_message = "Book is already in favourites."


# --- cross-service ---
class UpstreamError(ServiceError):
    """A call to another service did not succeed."""

    def __init__(
        self,
        service: str,
        message: Optional[str] = None,
        data: Any = None,
    ):
        super().__init__(message, data)
        self.service = service


class UpstreamUnreachable(UpstreamError):
    """Transport failure: connection refused, DNS, timeout."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Service unavailable."


class UpstreamRejected(UpstreamError):
    """The remote service answered with an error status; mirrored locally."""

    def __init__(self, service: str, status_code: int, message: str):
        super().__init__(service, message)
        self.status_code = status_code


class InternalError(ServiceError):
    pass


def register_exception_handlers(app: FastAPI, logger: logging.Logger) -> None:
    """Install the terminal error-to-response mapping on an application."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(
                f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}"
            )
        else:
            logger.info(
                f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}"
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"HTTPException: {exc.status_code} - {exc.detail}")
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = "Invalid Url"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed."
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=422,
            content={
                "message": ValidationError.default_message,
                "data": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_dict(),
        )
