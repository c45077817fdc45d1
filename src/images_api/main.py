import logging
from textwrap import dedent
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from images_api.adapters.storage import ImageUploadService, ObjectStore, S3ObjectStore
from images_api.config.settings import Settings
from images_api.errors import (
    handle_broad_exceptions,
    handle_request_validation_errors,
)
from images_api.routers.files import router as files_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[ObjectStore] = None) -> FastAPI:
    """
    Create a FastAPI application.

    The object store is built here, once per process, unless one is passed
    in. A store that cannot be prepared stops the app from being created.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Images API",
        summary="Upload images to object storage",
        version="v1",
        description=dedent(
            """\
        Validates JPG, PNG and GIF uploads of up to 2MB and stores them in S3.

        | Endpoint | Notes |
        | --- | --- |
        | `POST /api/files/upload` | multipart body with a single `file` field |
        | `GET /api/files/health` | static health payload |
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    logger.info("connecting to object storage")
    store = store or S3ObjectStore.connect(settings)
    app.state.upload_service = ImageUploadService(store)

    app.include_router(files_router, prefix=settings.api_prefix, tags=["files"])

    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_request_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    if not route.tags:
        return route.name
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    logging.basicConfig(level=settings.log_level)
    app = create_app(settings)
    uvicorn.run(app, host="0.0.0.0", port=8000)
