"""Translate commerce errors into ErrorResponse JSON."""

import logging
from typing import Any, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from enhanced_commerce.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised by routes; subclasses fix the status code and error category."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = "internal_error"

    def __init__(self, message: str, details: list[ErrorDetail] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> JSONResponse:
        body = ErrorResponse(error=self.error_type, message=self.message, details=self.details)
        return JSONResponse(status_code=self.status_code, content=body.model_dump(mode="json", exclude_none=True))


class NotFoundError(APIError):
    """Cart or order does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"


class ValidationError(APIError):
    """Request is well-formed but breaks a business rule."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_type = "validation_error"


class ConflictError(APIError):
    """Lost a race for a cart or the last use of a discount code."""

    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Render APIError subclasses and hide unexpected failures behind a 500."""
    try:
        return await call_next(request)
    except APIError as e:
        logger.warning("%s %s failed with %s: %s", request.method, request.url.path, e.error_type, e.message)
        return e.to_response()
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return APIError("An unexpected error occurred").to_response()
