import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from badgecount.errors import (
    BadRequestError,
    InternalError,
    InvalidLabelError,
    NotFoundError,
    StoreCorruptError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content, headers={"Cache-Control": "no-store"})


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, InvalidLabelError):
        status_code = 400
        error_type = "invalid_label"
    elif isinstance(exc, BadRequestError):
        status_code = 400
        error_type = "bad_request"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def service_error_handler(_: Request, exc: Exception) -> Response:
    """Handle ServiceError subclasses without exposing their messages."""
    if isinstance(exc, StoreUnavailableError):
        logger.warning("Badge store unavailable: %s", exc)
        return create_json_error_response(
            status_code=503, message="Service temporarily unavailable.", error_type="service_unavailable"
        )
    if isinstance(exc, StoreCorruptError):
        logger.error("Corrupt badge record: %s", exc, exc_info=exc)
        return create_json_error_response(status_code=500, message="Stored badge is invalid.", error_type="store_corrupt")
    if isinstance(exc, InternalError):
        logger.error("Internal error: %s", exc, exc_info=exc)
        return create_json_error_response(status_code=500, message="Internal error.", error_type="internal_error")
    return await general_exception_handler(_, exc)


async def request_validation_handler(_: Request, exc: Exception) -> Response:
    """Report malformed request bodies and parameters as plain bad requests."""
    logger.debug("Request validation failed: %s", exc)
    return create_json_error_response(status_code=400, message="Malformed request.", error_type="bad_request")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
