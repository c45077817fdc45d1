"""AWS fixtures for tests, backed by moto."""
import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from images_api.config.settings import Settings
from images_api.main import create_app
from tests.consts import TEST_BUCKET_NAME, TEST_REGION


@pytest.fixture
def aws_credentials(monkeypatch):
    """Point boto3 at fake credentials so nothing can reach real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.setenv("DEPLOYMENT_MODE", "aws-prod")
    monkeypatch.setenv("S3_BUCKET_NAME", TEST_BUCKET_NAME)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def mocked_aws(aws_credentials):
    with mock_aws():
        yield


@pytest.fixture
def s3_client(mocked_aws):
    return boto3.client("s3", region_name=TEST_REGION)


@pytest.fixture
def test_settings(aws_credentials) -> Settings:
    return Settings(
        deployment_mode="aws-prod",
        s3_bucket_name=TEST_BUCKET_NAME,
        aws_region=TEST_REGION,
    )


@pytest.fixture
def client(mocked_aws, test_settings):
    """A test client for an app wired to a moto-backed S3 bucket."""
    app = create_app(settings=test_settings)
    with TestClient(app) as client:
        yield client
