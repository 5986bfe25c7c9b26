"""S3-backed implementation of BlobStoreRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import StorageError
from core.repositories.storage_repository import BlobStoreRepository
from core.settings import StorageSettings
from core.utils.constants import (
    ERROR_CODE_CONTAINER_CREATE_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
)

logger = Logger(UTC=True)


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return error.get("Message") or error.get("Code") or str(exc)
    return str(exc)


class S3BlobStore(BlobStoreRepository):
    """Public blob storage backed by an Amazon S3 bucket."""

    def __init__(
        self,
        settings: StorageSettings | None = None,
        adapter: S3AdapterProtocol | None = None,
    ) -> None:
        """Create storage using the provided S3 adapter or one built from settings."""
        if adapter is None:
            if settings is None:
                raise ValueError("Either settings or adapter is required")
            adapter = S3Adapter(settings)
        self._s3 = adapter

    def ensure_container(self) -> None:
        """Create the bucket with public object read if it is missing."""
        bucket = self._s3.bucket

        try:
            if self._s3.bucket_exists():
                logger.debug("Bucket already exists", extra={"bucket": bucket})
                return

            try:
                self._s3.create_bucket()
            except ClientError as exc:
                # Lost a creation race with a concurrent request
                if exc.response.get("Error", {}).get("Code") != "BucketAlreadyOwnedByYou":
                    raise

            self._s3.allow_public_object_read()
            logger.info("Bucket created with public object read", extra={"bucket": bucket})

        except (ClientError, BotoCoreError) as exc:
            logger.exception("Failed to ensure bucket", extra={"bucket": bucket})
            raise StorageError(
                message=_error_message(exc),
                error_code=ERROR_CODE_CONTAINER_CREATE_FAILED,
                details={"bucket": bucket},
            ) from exc

    def put(
        self,
        *,
        key: str,
        data: bytes,
        content_type: str,
        cache_control: str,
        metadata: dict[str, str],
    ) -> str:
        """Upload bytes and return the public object URL."""
        logger.debug(
            "Uploading object",
            extra={"key": key, "size": len(data), "content_type": content_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=data,
                content_type=content_type,
                cache_control=cache_control,
                metadata=metadata,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.exception("S3 upload failed", extra={"key": key})
            raise StorageError(
                message=_error_message(exc),
                error_code=ERROR_CODE_IMAGE_UPLOAD_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Object uploaded successfully", extra={"key": key})
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return self._s3.object_url(key)
