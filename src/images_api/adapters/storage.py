"""
Storage adapter for uploaded images.

`ObjectStore` is the capability the upload workflow needs from a backend.
`S3ObjectStore` is the production implementation; it is created once at
startup and shared by every request. `ImageUploadService` names, checks and
stores a validated image and reports the outcome as an `UploadResult`.
"""

import logging
from typing import Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

from images_api.config.settings import Settings
from images_api.errors import StorageBackendError, StorageInitializationError
from images_api.naming import generate_object_name
from images_api.s3.buckets import allow_public_object_reads, create_bucket_if_not_exists
from images_api.s3.client import create_s3_client
from images_api.s3.read_objects import get_s3_object_url, object_exists_in_s3
from images_api.s3.write_objects import upload_s3_object
from images_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)


class UploadResult(BaseModel):
    """Outcome of storing one image."""
    success: bool = False
    url: Optional[str] = None
    object_name: Optional[str] = None
    error_message: Optional[str] = None
    namespace: Optional[str] = None


class ObjectStore(Protocol):
    """What the upload workflow needs from an object storage backend."""

    @property
    def namespace(self) -> str:
        """Name of the bucket or container objects are stored in."""
        ...

    def exists(self, object_name: str) -> bool:
        ...

    def put(self, object_name: str, data: bytes, content_type: str) -> str:
        """Store `data` under `object_name` and return the object's URL."""
        ...


class S3ObjectStore:
    """An `ObjectStore` backed by a single S3 bucket."""

    def __init__(self, bucket_name: str, s3_client: "S3Client"):
        self._bucket_name = bucket_name
        self._s3_client = s3_client

    @classmethod
    @log_execution_time(label="S3ObjectStore.connect")
    def connect(cls, settings: Settings) -> "S3ObjectStore":
        """
        Obtain or create the configured bucket and open it for public object reads.

        :raises StorageInitializationError: if credentials are missing or the
            bucket cannot be reached, created or configured.
        """
        if not settings.aws_access_key_id or not settings.aws_secret_access_key:
            raise StorageInitializationError(
                "Object storage credentials are required. "
                "Set AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY."
            )

        bucket_name = settings.s3_bucket_name
        try:
            s3_client = create_s3_client(settings)
            create_bucket_if_not_exists(bucket_name, s3_client)
            allow_public_object_reads(bucket_name, s3_client)
        except (BotoCoreError, ClientError, ValueError) as err:
            raise StorageInitializationError(
                f"Failed to initialize S3 bucket '{bucket_name}'. "
                f"Please check the credentials, endpoint and bucket name. Error: {err}"
            ) from err

        logger.info(f"Using S3 bucket: {bucket_name}")
        return cls(bucket_name, s3_client)

    @property
    def namespace(self) -> str:
        return self._bucket_name

    def exists(self, object_name: str) -> bool:
        return object_exists_in_s3(self._bucket_name, object_name, s3_client=self._s3_client)

    def put(self, object_name: str, data: bytes, content_type: str) -> str:
        response = upload_s3_object(
            bucket_name=self._bucket_name,
            object_key=object_name,
            file_content=data,
            content_type=content_type,
            s3_client=self._s3_client,
        )
        if not response or not response.get("ETag"):
            raise StorageBackendError("Failed to upload file to object storage.")
        return get_s3_object_url(self._bucket_name, object_name, s3_client=self._s3_client)


class ImageUploadService:
    """
    Stores validated images under collision-resistant names.

    Never raises: backend failures are logged and returned as an
    unsuccessful `UploadResult`.

    The existence check and the upload are not atomic. Two uploads that both
    fall back to a random token could in theory still collide; this is
    accepted rather than guarded with a second check.
    """

    def __init__(self, store: ObjectStore):
        self._store = store

    @property
    def store(self) -> ObjectStore:
        return self._store

    @log_execution_time
    async def upload_image(self, file_name: str, data: bytes, content_type: str) -> UploadResult:
        """
        Name, check and store one image.

        :param file_name: The name the client gave the file.
        :param data: The file content.
        :param content_type: The declared MIME type, stored as object metadata.
        """
        namespace = self._store.namespace
        try:
            object_name = generate_object_name(file_name)
            if await run_in_threadpool(self._store.exists, object_name):
                object_name = generate_object_name(file_name, force_unique=True)
                logger.warning(f"Filename conflict detected. Using new name: {object_name}")

            url = await run_in_threadpool(self._store.put, object_name, data, content_type)
        except StorageBackendError as err:
            logger.exception(f"Error uploading to object storage: {err}")
            return UploadResult(success=False, error_message=str(err), namespace=namespace)
        except Exception as err:
            logger.exception(f"Error uploading to object storage: {err}")
            return UploadResult(
                success=False,
                error_message=f"Object storage error: {err}",
                namespace=namespace,
            )

        logger.info(f"File uploaded successfully: {object_name}")
        return UploadResult(success=True, url=url, object_name=object_name, namespace=namespace)
