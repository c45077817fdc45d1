"""Exception types and the app-wide exception handlers."""

import logging
from typing import Optional

from fastapi import Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from images_api.config.settings import Settings
from images_api.schemas import ErrorResponse

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "No file provided."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during file upload."


class ImageValidationError(Exception):
    """The uploaded file was rejected before reaching storage."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StorageBackendError(Exception):
    """The object store could not complete an operation."""


class StorageInitializationError(StorageBackendError):
    """The object store could not be reached or prepared at startup."""


def error_response(
    settings: Settings,
    message: str,
    detail: Optional[str] = None,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
) -> JSONResponse:
    """Build a failure body, echoing `detail` only when detailed errors are enabled."""
    body = ErrorResponse(
        message=message,
        detailed_error=detail if settings.show_detailed_errors else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {err}")
        settings: Settings = request.app.state.settings
        return error_response(settings, UNEXPECTED_ERROR_MESSAGE, detail=str(err))


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report a malformed `file` part as a missing file.

    A form field named `file` that is not a file upload fails FastAPI's own
    validation before the endpoint runs; clients get the same 400 as for an
    absent file. Every other validation failure keeps FastAPI's 422.
    """
    if any(tuple(error["loc"][-1:]) == ("file",) for error in exc.errors()):
        logger.info(f"Rejected upload on {request.url.path}: file field is not a file")
        body = ErrorResponse(message=NO_FILE_MESSAGE)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(by_alias=True, exclude_none=True),
        )
    return await request_validation_exception_handler(request, exc)
