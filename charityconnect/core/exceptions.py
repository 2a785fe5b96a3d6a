"""Domain errors and the JSON exception handlers registered on the app."""
import logging
from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class PaymentError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class PaymentUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Payment processing not available. Please contact administrator to configure Stripe."):
        super().__init__(message)


class InvalidTransitionError(AppError):
    status_code = status.HTTP_409_CONFLICT


class NotificationFailure(Exception):
    """Raised inside the notifier only; never reaches a handler."""


def _field_errors(errors) -> List[Dict[str, str]]:
    collected = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        collected.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return collected


async def app_error_handler(request: Request, exc: AppError):
    content: Dict[str, Any] = {"message": exc.message}
    if isinstance(exc, InvalidInputError) and exc.errors:
        content["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = _field_errors(exc.errors())
    logger.info(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": errors},
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    status_code = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    if not isinstance(status_code, int):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status_code,
        content={"message": str(exc) or "Internal Server Error"},
    )
