"""Functions for preparing the S3 bucket images are stored in."""

import json
import logging
from typing import Optional

import boto3
from botocore.exceptions import ClientError

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)


def bucket_exists(bucket_name: str, s3_client: Optional["S3Client"] = None) -> bool:
    """Check if a bucket exists and is reachable with the client's credentials."""
    s3_client = s3_client or boto3.client("s3")
    try:
        s3_client.head_bucket(Bucket=bucket_name)
        return True
    except ClientError as err:
        error_code = err.response.get("Error", {}).get("Code")
        if error_code in ("404", "NoSuchBucket", "NotFound"):
            return False
        raise


def create_bucket_if_not_exists(bucket_name: str, s3_client: Optional["S3Client"] = None) -> bool:
    """
    Create the bucket unless it already exists.

    :param bucket_name: Name of the S3 bucket.
    :param s3_client: Optional S3 client. Its region decides the bucket location.
    :return: True if the bucket was created, False if it already existed.
    """
    s3_client = s3_client or boto3.client("s3")
    if bucket_exists(bucket_name, s3_client):
        logger.info(f"Using existing S3 bucket: {bucket_name}")
        return False

    region = s3_client.meta.region_name
    if region and region != "us-east-1":
        s3_client.create_bucket(
            Bucket=bucket_name,
            CreateBucketConfiguration={"LocationConstraint": region},
        )
    else:
        # us-east-1 rejects an explicit location constraint
        s3_client.create_bucket(Bucket=bucket_name)
    logger.info(f"Created S3 bucket: {bucket_name}")
    return True


def allow_public_object_reads(bucket_name: str, s3_client: Optional["S3Client"] = None) -> None:
    """
    Let anyone read individual objects in the bucket, but not list it.

    New buckets block public policies by default, so the block is relaxed
    before the policy is attached.
    """
    s3_client = s3_client or boto3.client("s3")
    s3_client.put_public_access_block(
        Bucket=bucket_name,
        PublicAccessBlockConfiguration={
            "BlockPublicAcls": True,
            "IgnorePublicAcls": True,
            "BlockPublicPolicy": False,
            "RestrictPublicBuckets": False,
        },
    )
    policy = {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Sid": "PublicReadGetObject",
                "Effect": "Allow",
                "Principal": "*",
                "Action": "s3:GetObject",
                "Resource": f"arn:aws:s3:::{bucket_name}/*",
            }
        ],
    }
    s3_client.put_bucket_policy(Bucket=bucket_name, Policy=json.dumps(policy))
    logger.info(f"Enabled public object reads on bucket: {bucket_name}")
