"""Centralized error handling for the application"""

import logging
from typing import Dict, Any, Optional
from fastapi import Request, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError

from intouch.core.i18n import TRANSLATIONS, normalize_language, translate
from intouch.core.config import settings
from intouch.services.exceptions import (
    ServiceException,
    ValidationError as ServiceValidationError,
    NotFoundError,
    AuthenticationError,
    PermissionError,
    ConflictError,
    DispatchError,
)

logger = logging.getLogger(__name__)


def request_language(request: Request) -> str:
    """Session language when a session was resolved, else Accept-Language"""
    language = getattr(request.state, "language", None)
    return language or normalize_language(request.headers.get("accept-language"))


def localized_message(request: Request, key: Optional[str], fallback: str, params: Dict[str, Any] = None) -> str:
    """Translate ``key`` for the request, keeping ``fallback`` for unknown keys"""
    known = TRANSLATIONS.get(settings.FALLBACK_LANGUAGE, {})
    if not key or key not in known:
        return fallback
    return translate(key, params, language=request_language(request))


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def create_error_response(
        status_code: int,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None
    ) -> JSONResponse:
        """Create a standardized error response"""
        content = {
            "error": {
                "message": message,
                "code": error_code,
                "details": details or {}
            }
        }
        return JSONResponse(status_code=status_code, content=content)


def service_exception_handler(request: Request, exc: ServiceException) -> JSONResponse:
    """Handle service layer exceptions"""
    logger.warning(f"Service exception: {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "path": request.url.path
    })

    # Map service exceptions to HTTP status codes
    status_map = {
        ServiceValidationError: status.HTTP_400_BAD_REQUEST,
        AuthenticationError: status.HTTP_401_UNAUTHORIZED,
        PermissionError: status.HTTP_403_FORBIDDEN,
        NotFoundError: status.HTTP_404_NOT_FOUND,
        ConflictError: status.HTTP_409_CONFLICT,
        DispatchError: status.HTTP_502_BAD_GATEWAY,
    }

    status_code = status_map.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

    return ErrorHandler.create_error_response(
        status_code=status_code,
        message=localized_message(request, exc.error_code, exc.message, exc.details),
        error_code=exc.error_code,
        details=exc.details
    )


def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error: {exc}", extra={"path": request.url.path})

    details = {}
    for error in exc.errors():
        field = ".".join(str(x) for x in error["loc"])
        details[field] = error["msg"]

    return ErrorHandler.create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation failed",
        error_code="VALIDATION_ERROR",
        details=details
    )


def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions"""
    logger.warning(f"HTTP exception: {exc.detail}", extra={
        "status_code": exc.status_code,
        "path": request.url.path
    })

    return ErrorHandler.create_error_response(
        status_code=exc.status_code,
        message=localized_message(request, str(exc.detail), str(exc.detail)),
        error_code="HTTP_ERROR"
    )


def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database errors"""
    logger.error(f"Database error: {exc}", extra={"path": request.url.path})

    return ErrorHandler.create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=localized_message(request, "unexpectedError", "A database error occurred"),
        error_code="DATABASE_ERROR"
    )


def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    logger.error(f"Unexpected error: {exc}", extra={"path": request.url.path}, exc_info=True)

    return ErrorHandler.create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=localized_message(request, "unexpectedError", "An unexpected error occurred"),
        error_code="INTERNAL_ERROR"
    )
