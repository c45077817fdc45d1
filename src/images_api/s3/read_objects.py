"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

from typing import Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import ClientError

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...


def object_exists_in_s3(bucket_name: str, object_key: str, s3_client: Optional["S3Client"] = None) -> bool:
    """
    Check if an object exists in the S3 bucket using head_object.

    :param bucket_name: Name of the S3 bucket.
    :param object_key: Key of the object to check.
    :param s3_client: Optional S3 client to use. If not provided, a new client will be created.

    :return: True if the object exists, False otherwise.
    :raises ClientError: for any failure other than a missing object.
    """
    s3_client = s3_client or boto3.client("s3")
    try:
        s3_client.head_object(Bucket=bucket_name, Key=object_key)
        return True
    except ClientError as err:
        error_code = err.response.get("Error", {}).get("Code")
        if error_code in ("404", "NoSuchKey", "NotFound"):
            return False
        raise


def get_s3_object_url(bucket_name: str, object_key: str, s3_client: Optional["S3Client"] = None) -> str:
    """
    Build the path-style URL an object can be read from.

    :param bucket_name: Name of the S3 bucket.
    :param object_key: Key of the object.
    :param s3_client: Optional S3 client whose endpoint is used.
    """
    s3_client = s3_client or boto3.client("s3")
    endpoint_url = s3_client.meta.endpoint_url.rstrip("/")
    return f"{endpoint_url}/{bucket_name}/{quote(object_key)}"
