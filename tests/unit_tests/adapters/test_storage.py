import pytest
from botocore.exceptions import EndpointConnectionError

import images_api.adapters.storage as storage_module
from images_api.adapters.storage import ImageUploadService, S3ObjectStore, UploadResult
from images_api.config.settings import Settings
from images_api.errors import StorageBackendError, StorageInitializationError
from tests.consts import TEST_BUCKET_NAME
from tests.fixtures.storage_fixtures import InMemoryObjectStore


class TestImageUploadService:
    """Naming, conflict handling and failure capture, against an in-memory store."""

    async def test_stores_image_and_reports_url(self):
        store = InMemoryObjectStore()
        service = ImageUploadService(store)

        result = await service.upload_image("photo.png", b"png bytes", "image/png")

        assert isinstance(result, UploadResult)
        assert result.success is True
        assert result.error_message is None
        assert result.namespace == TEST_BUCKET_NAME
        assert result.object_name.startswith("photo_") and result.object_name.endswith(".png")
        assert result.url.endswith(result.object_name)
        assert store.objects[result.object_name] == (b"png bytes", "image/png")

    async def test_regenerates_name_once_on_conflict(self, monkeypatch):
        store = InMemoryObjectStore()
        service = ImageUploadService(store)
        taken = "photo_20240101000000.png"
        store.objects[taken] = (b"old", "image/png")
        monkeypatch.setattr(
            storage_module,
            "generate_object_name",
            lambda name, force_unique=False: "photo_20240101000000_" + "f" * 32 + ".png" if force_unique else taken,
        )

        result = await service.upload_image("photo.png", b"new", "image/png")

        assert result.success is True
        assert result.object_name == "photo_20240101000000_" + "f" * 32 + ".png"
        assert store.exists_calls == [taken]
        assert store.objects[taken] == (b"old", "image/png")

    async def test_captures_backend_errors_instead_of_raising(self):
        store = InMemoryObjectStore(put_error=ConnectionError("socket closed"))
        service = ImageUploadService(store)

        result = await service.upload_image("photo.png", b"png", "image/png")

        assert result.success is False
        assert result.url is None
        assert result.object_name is None
        assert result.error_message == "Object storage error: socket closed"
        assert result.namespace == TEST_BUCKET_NAME

    async def test_storage_backend_error_message_is_passed_through(self):
        store = InMemoryObjectStore(exists_error=StorageBackendError("bucket unavailable"))
        service = ImageUploadService(store)

        result = await service.upload_image("photo.png", b"png", "image/png")

        assert result.success is False
        assert result.error_message == "bucket unavailable"
        assert store.put_calls == []


class StubS3Client:
    """Just enough of an S3 client to exercise `S3ObjectStore.put`."""

    class meta:
        endpoint_url = "https://s3.example.com/"

    def __init__(self, put_response):
        self.put_response = put_response

    def put_object(self, **kwargs):
        return self.put_response


class TestS3ObjectStore:
    def test_connect_creates_bucket(self, mocked_aws, s3_client, test_settings):
        store = S3ObjectStore.connect(test_settings)

        assert store.namespace == TEST_BUCKET_NAME
        s3_client.head_bucket(Bucket=TEST_BUCKET_NAME)

    def test_connect_reuses_existing_bucket(self, mocked_aws, s3_client, test_settings):
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
        s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key="kept.png", Body=b"kept")

        store = S3ObjectStore.connect(test_settings)

        assert store.exists("kept.png")

    def test_put_and_exists_round_trip(self, mocked_aws, s3_client, test_settings):
        store = S3ObjectStore.connect(test_settings)

        assert not store.exists("cat.gif")
        url = store.put("cat.gif", b"GIF89a", "image/gif")

        assert store.exists("cat.gif")
        assert url.endswith(f"/{TEST_BUCKET_NAME}/cat.gif")
        head = s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key="cat.gif")
        assert head["ContentType"] == "image/gif"

    def test_connect_requires_credentials(self, monkeypatch):
        monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
        monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)
        settings = Settings(deployment_mode="aws-prod")

        with pytest.raises(StorageInitializationError, match="credentials are required"):
            S3ObjectStore.connect(settings)

    def test_connect_fails_when_bucket_is_unreachable(self, monkeypatch, test_settings):
        def unreachable(bucket_name, s3_client=None):
            raise EndpointConnectionError(endpoint_url="https://s3.example.com")

        monkeypatch.setattr(storage_module, "create_bucket_if_not_exists", unreachable)

        with pytest.raises(StorageInitializationError, match=TEST_BUCKET_NAME) as exc_info:
            S3ObjectStore.connect(test_settings)
        assert isinstance(exc_info.value.__cause__, EndpointConnectionError)

    def test_put_without_etag_is_an_error(self):
        store = S3ObjectStore("bucket", StubS3Client(put_response={}))

        with pytest.raises(StorageBackendError, match="Failed to upload file"):
            store.put("cat.gif", b"GIF89a", "image/gif")

    def test_put_returns_path_style_url(self):
        store = S3ObjectStore("bucket", StubS3Client(put_response={"ETag": '"abc"'}))

        assert store.put("my cat.gif", b"GIF89a", "image/gif") == "https://s3.example.com/bucket/my%20cat.gif"
