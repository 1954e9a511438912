"""Domain exceptions and their HTTP mapping"""

from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.logging import get_logger
from app.schemas.responses import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors raised by services and dependencies."""
    code: str = "APP_ERROR"
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, *, headers: Optional[Dict[str, str]] = None) -> None:
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required"


class Unauthenticated(AppError):
    """No credentials were presented."""
    code = "UNAUTHENTICATED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "No token provided"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    """Credentials were presented but are not acceptable."""
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class Unauthorized(AppError):
    """Login with an unknown email or a wrong password."""
    code = "INVALID_CREDENTIALS"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Conflict(AppError):
    code = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class NotFound(AppError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InternalError(AppError):
    code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def error_response(status_code: int, code: str, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        if loc:
            fields.append(".".join(loc))
    if not fields:
        return "Request body is missing or malformed"
    return "Missing or invalid fields: " + ", ".join(dict.fromkeys(fields))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers for domain, validation and unexpected errors."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(
                exc.message,
                extra={
                    "path": request.url.path,
                    "correlation_id": getattr(request.state, "request_id", None),
                },
                exc_info=exc.__cause__,
            )
        return error_response(exc.status_code, exc.code, exc.message, exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_errors(exc)
        logger.warning(
            "Validation error",
            extra={
                "path": request.url.path,
                "errors": message,
                "correlation_id": getattr(request.state, "request_id", None),
            }
        )
        return error_response(ValidationError.status_code, ValidationError.code, message)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception: {exc}",
            extra={
                "path": request.url.path,
                "correlation_id": getattr(request.state, "request_id", None),
            },
            exc_info=True
        )
        return error_response(InternalError.status_code, InternalError.code, InternalError.default_message)
