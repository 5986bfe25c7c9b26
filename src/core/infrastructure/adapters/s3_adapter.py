"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
import json
from typing import Any, Protocol
from urllib.parse import quote

import boto3
from botocore.exceptions import ClientError

from core.settings import StorageSettings
from core.utils.constants import DEFAULT_AWS_REGION


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def head_bucket(self, *, Bucket: str) -> Any: ...

    def create_bucket(self, **kwargs: Any) -> Any: ...

    def put_public_access_block(
        self,
        *,
        Bucket: str,
        PublicAccessBlockConfiguration: Mapping[str, bool],
    ) -> Any: ...

    def put_bucket_policy(self, *, Bucket: str, Policy: str) -> Any: ...

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        CacheControl: str,
        Metadata: Mapping[str, str],
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    @property
    def bucket(self) -> str: ...

    def bucket_exists(self) -> bool: ...

    def create_bucket(self) -> None: ...

    def allow_public_object_read(self) -> None: ...

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        cache_control: str,
        metadata: dict[str, str],
    ) -> None: ...

    def object_url(self, key: str) -> str: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT translate errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, settings: StorageSettings) -> None:
        """Create S3 client from storage settings."""
        self._bucket = settings.bucket_name
        self._region = settings.region
        self._endpoint_url = settings.endpoint_url
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            region_name=settings.region,
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            aws_session_token=settings.session_token,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def bucket_exists(self) -> bool:
        """Return whether the bucket exists.

        Raises boto3 exceptions other than a 404 - caught by domain implementation.
        """
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in ("404", "NoSuchBucket", "NotFound"):
                return False
            raise
        return True

    def create_bucket(self) -> None:
        """Create the bucket in the configured region."""
        kwargs: dict[str, Any] = {"Bucket": self._bucket}
        # us-east-1 rejects an explicit LocationConstraint
        if self._region != DEFAULT_AWS_REGION:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._region}

        self._client.create_bucket(**kwargs)

    def allow_public_object_read(self) -> None:
        """Grant anonymous read on objects, without allowing bucket listing."""
        self._client.put_public_access_block(
            Bucket=self._bucket,
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
                    "Resource": f"arn:aws:s3:::{self._bucket}/*",
                }
            ],
        }
        self._client.put_bucket_policy(Bucket=self._bucket, Policy=json.dumps(policy))

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        cache_control: str,
        metadata: dict[str, str],
    ) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            CacheControl=cache_control,
            Metadata=metadata,
        )

    def object_url(self, key: str) -> str:
        """Public URL for an object key.

        Path-style under a custom endpoint, virtual-hosted style on AWS.
        """
        quoted_key = quote(key, safe="/")

        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{quoted_key}"

        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{quoted_key}"
