import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse

from images_api.adapters.storage import ImageUploadService
from images_api.config.settings import Settings
from images_api.errors import (
    UNEXPECTED_ERROR_MESSAGE,
    ImageValidationError,
    error_response,
)
from images_api.schemas import (
    ErrorResponse,
    HealthResponse,
    UploadImageResponse,
)
from images_api.validation import (
    ADVERTISED_CONTENT_TYPES,
    MAX_FILE_SIZE_BYTES,
    validate_image_upload,
)

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = "File upload failed."

router = APIRouter()


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_upload_service(request: Request) -> ImageUploadService:
    return request.app.state.upload_service


@router.post(
    "/upload",
    response_model=UploadImageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def upload_image(
    file: Optional[UploadFile] = File(None, description="The image to upload"),
    settings: Settings = Depends(get_settings_from_app),
    upload_service: ImageUploadService = Depends(get_upload_service),
):
    """
    Upload an image to object storage.

    Accepts one JPG, PNG or GIF file of at most 2MB and returns the URL it
    can be read from.
    """
    try:
        file_name = file.filename if file else None
        content_type = file.content_type if file else None
        file_bytes = None
        if file is None:
            size = 0
        elif file.size is not None:
            size = file.size
        else:
            file_bytes = await file.read()
            size = len(file_bytes)

        try:
            validate_image_upload(file_name, content_type, size)
        except ImageValidationError as err:
            logger.info(f"Rejected upload {file_name!r}: {err.message}")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=ErrorResponse(message=err.message).model_dump(by_alias=True, exclude_none=True),
            )

        # the body is only pulled into memory once it is known to fit
        if file_bytes is None:
            file_bytes = await file.read()

        logger.info(f"Starting upload for file: {file_name}, Size: {len(file_bytes)} bytes")
        result = await upload_service.upload_image(file_name, file_bytes, content_type)

        if not result.success:
            logger.error(f"Upload failed for {file_name}: {result.error_message}")
            return error_response(settings, UPLOAD_FAILED_MESSAGE, detail=result.error_message)

        logger.info(f"File uploaded successfully: {result.object_name}, URL: {result.url}")
        return UploadImageResponse(
            url=result.url,
            file_name=result.object_name,
            file_size=len(file_bytes),
            content_type=content_type,
            uploaded_at=datetime.now(timezone.utc),
        )
    except Exception as err:
        logger.exception(f"Error uploading file: {err}")
        return error_response(settings, UNEXPECTED_ERROR_MESSAGE, detail=str(err))


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report the service status and the upload limits it enforces."""
    return HealthResponse(
        timestamp=datetime.now(timezone.utc),
        max_file_size=MAX_FILE_SIZE_BYTES,
        allowed_types=list(ADVERTISED_CONTENT_TYPES),
    )
