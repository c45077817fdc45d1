####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response bodies, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadImageResponse(ApiModel):
    """Response model for `POST /api/files/upload`."""
    success: bool = True
    url: str = Field(description="Public URL of the stored object.")
    file_name: str = Field(description="Name the object was stored under.")
    file_size: int = Field(description="Size of the uploaded file in bytes.")
    content_type: str = Field(description="Content type declared by the client.")
    uploaded_at: datetime = Field(description="UTC time the upload completed.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "url": "https://s3.amazonaws.com/tprofiletest/photo_20240101123456.png",
                "fileName": "photo_20240101123456.png",
                "fileSize": 512000,
                "contentType": "image/png",
                "uploadedAt": "2024-01-01T12:34:56Z",
            }
        }
    )


class ErrorResponse(ApiModel):
    """Failure body shared by the 400 and 500 responses."""
    success: bool = False
    message: str
    detailed_error: Optional[str] = Field(
        default=None,
        description="Internal error detail, only present when detailed errors are enabled.",
    )


class HealthResponse(ApiModel):
    """Response model for `GET /api/files/health`."""
    status: str = "healthy"
    timestamp: datetime
    max_file_size: int
    allowed_types: List[str]
