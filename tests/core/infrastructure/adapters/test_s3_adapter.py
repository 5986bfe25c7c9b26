import json

import pytest
from botocore.exceptions import ClientError
from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.settings import StorageSettings
from core.utils.constants import UPLOAD_BUCKET_NAME


def make_settings(**overrides) -> StorageSettings:
    values = {
        "bucket_name": UPLOAD_BUCKET_NAME,
        "access_key_id": "testing",
        "secret_access_key": "testing",
        "region": "us-east-1",
    }
    values.update(overrides)
    return StorageSettings(**values)


class TestS3Adapter:
    def test_bucket_exists_false_then_true(self, s3_client):
        adapter = S3Adapter(make_settings())

        assert adapter.bucket_exists() is False

        adapter.create_bucket()

        assert adapter.bucket_exists() is True

    def test_create_bucket_outside_us_east_1(self, s3_client):
        adapter = S3Adapter(make_settings(region="eu-west-1"))

        adapter.create_bucket()

        location = s3_client.get_bucket_location(Bucket=UPLOAD_BUCKET_NAME)
        assert location["LocationConstraint"] == "eu-west-1"

    def test_allow_public_object_read(self, s3_bucket):
        adapter = S3Adapter(make_settings())

        adapter.allow_public_object_read()

        policy = json.loads(s3_bucket.get_bucket_policy(Bucket=UPLOAD_BUCKET_NAME)["Policy"])
        statement = policy["Statement"][0]
        assert statement["Effect"] == "Allow"
        assert statement["Principal"] == "*"
        assert statement["Action"] == "s3:GetObject"

        block = s3_bucket.get_public_access_block(Bucket=UPLOAD_BUCKET_NAME)
        config = block["PublicAccessBlockConfiguration"]
        assert config["BlockPublicPolicy"] is False
        assert config["RestrictPublicBuckets"] is False

    def test_put_object_success(self, s3_bucket, s3_get_object):
        adapter = S3Adapter(make_settings())

        adapter.put_object(
            key="abc.png",
            body=b"image-bytes",
            content_type="image/png",
            cache_control="public, max-age=31536000",
            metadata={"uploaded_at": "2024-01-01T00:00:00+00:00"},
        )

        stored = s3_get_object("abc.png")
        assert stored["Body"] == b"image-bytes"
        assert stored["ContentType"] == "image/png"
        assert stored["CacheControl"] == "public, max-age=31536000"
        assert stored["Metadata"] == {"uploaded_at": "2024-01-01T00:00:00+00:00"}

    def test_put_object_bubbles_client_error(self, monkeypatch, s3_bucket):
        adapter = S3Adapter(make_settings())

        def raise_error(**_):
            raise ClientError(
                {"Error": {"Code": "InternalError"}},
                "PutObject",
            )

        monkeypatch.setattr(adapter._client, "put_object", raise_error)

        with pytest.raises(ClientError):
            adapter.put_object(
                key="x.jpg",
                body=b"data",
                content_type="image/jpeg",
                cache_control="no-cache",
                metadata={},
            )

    def test_bucket_exists_bubbles_non_404(self, monkeypatch, s3_client):
        adapter = S3Adapter(make_settings())

        def raise_error(**_):
            raise ClientError({"Error": {"Code": "403", "Message": "Forbidden"}}, "HeadBucket")

        monkeypatch.setattr(adapter._client, "head_bucket", raise_error)

        with pytest.raises(ClientError):
            adapter.bucket_exists()

    def test_object_url_virtual_hosted(self, aws_mock):
        adapter = S3Adapter(make_settings(region="eu-west-1"))

        assert adapter.object_url("abc.png") == (
            f"https://{UPLOAD_BUCKET_NAME}.s3.eu-west-1.amazonaws.com/abc.png"
        )

    def test_object_url_custom_endpoint(self, aws_mock):
        adapter = S3Adapter(make_settings(endpoint_url="http://localhost:4566/"))

        assert adapter.object_url("a b.png") == (
            f"http://localhost:4566/{UPLOAD_BUCKET_NAME}/a%20b.png"
        )
