"""Construction of the boto3 S3 client from settings."""

import boto3

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

from images_api.config.settings import Settings


def create_s3_client(settings: Settings) -> "S3Client":
    """
    Create an S3 client for the configured region, endpoint, and credentials.

    :param settings: Application settings.
    """
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        endpoint_url=settings.aws_endpoint_url,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
    )
