"""
Pytest configuration and fixtures for image-upload tests.
Provides AWS environment setup, S3 mocking and sample image data.
"""

import base64
import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from core.utils.constants import UPLOAD_BUCKET_NAME

# 1x1 pixel PNG
SAMPLE_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Fake credentials and a fixed region so nothing reaches real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("POWERTOOLS_TRACE_DISABLED", "true")
    monkeypatch.setenv("POWERTOOLS_METRICS_NAMESPACE", "ImageUpload")
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create the upload bucket up front.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    try:
        s3_client.head_bucket(Bucket=UPLOAD_BUCKET_NAME)
    except ClientError:
        s3_client.create_bucket(Bucket=UPLOAD_BUCKET_NAME)

    yield s3_client

    _cleanup_s3_objects(s3_client, UPLOAD_BUCKET_NAME)


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], dict[str, Any]]:
    """
    Helper to fetch an object (body bytes plus headers) from the upload bucket.

    Usage:
        obj = s3_get_object("<uuid>.png")
        obj["Body"], obj["ContentType"]
    """

    def _get(key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_client.get_object(
            Bucket=UPLOAD_BUCKET_NAME,
            Key=key,
        )
        return {**response, "Body": response["Body"].read()}

    return _get


@pytest.fixture
def s3_list_keys(s3_client) -> Callable[[], list[str]]:
    """Helper listing every key in the upload bucket (empty if it does not exist)."""

    def _list() -> list[str]:
        try:
            response = s3_client.list_objects_v2(Bucket=UPLOAD_BUCKET_NAME)
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchBucket":
                return []
            raise
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


@pytest.fixture
def sample_png_base64() -> str:
    return SAMPLE_PNG_BASE64


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    return base64.b64decode(SAMPLE_PNG_BASE64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )
