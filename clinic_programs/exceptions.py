"""
Global exception handlers and custom exception classes.

Services raise the typed exceptions below; the handlers registered on the
application turn them into ``{"message": ...}`` JSON responses.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationException(AppException):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationException(AppException):
    """Bad credentials or missing bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied"


class InvalidTokenException(AppException):
    """Bearer token with a bad signature, malformed or expired."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class ForbiddenException(AppException):
    """Authenticated user whose stored role is not allowed."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundException(AppException):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictException(AppException):
    """Operation would violate a uniqueness or integrity rule."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalServerException(AppException):
    """Unexpected persistence failure."""


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    logger.warning(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({
            "message": "Validation error",
            "errors": exc.errors()
        })
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Handler for anything that escaped the service layer.

    The traceback is logged; the caller only sees a generic message.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"}
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
