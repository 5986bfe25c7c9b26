"""Business logic for image upload operations.

This module validates the uploaded file, generates a fresh object key and
stores the bytes in public blob storage, translating failures into
domain-specific errors.
"""

import uuid
from collections.abc import Callable

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_blob_store import S3BlobStore
from core.models.errors import ValidationError
from core.models.upload import StoredObject
from core.repositories.storage_repository import BlobStoreRepository
from core.settings import load_storage_settings
from core.utils.constants import (
    CACHE_CONTROL_IMMUTABLE,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_NO_FILE_PROVIDED,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    MAX_FILE_SIZE,
    MESSAGE_NO_FILE,
    MESSAGE_ONLY_IMAGES,
    MESSAGE_UPLOAD_SUCCESS,
    METADATA_UPLOADED_AT,
    format_file_size,
    get_max_file_size_mb,
)
from core.utils.mime import extension_for, is_image_mime_type, resolve_content_type
from core.utils.time import utc_now_iso

from .models import ImageUploadResponse, UploadedFile

logger = Logger(UTC=True)


def _default_store_factory() -> BlobStoreRepository:
    return S3BlobStore(settings=load_storage_settings())


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - File validation (presence, image MIME type, size)
    - Storage configuration check, before any network call
    - Idempotent container creation
    - Writing the bytes under a server-generated key
    """

    def __init__(
        self,
        store_factory: Callable[[], BlobStoreRepository] = _default_store_factory,
    ) -> None:
        """Initialize the upload service with a factory for the blob store."""
        self._store_factory = store_factory

    @staticmethod
    def generate_filename(extension: str) -> str:
        """Generate a unique object key, ``<uuid4>.<extension>``."""
        return f"{uuid.uuid4()}.{extension}"

    @staticmethod
    def validate_file(file: UploadedFile | None) -> str:
        """Check the uploaded file and return its resolved content type.

        Raises:
            ValidationError: If no file was sent, it is not an image, or it is too large
        """
        if file is None or not file.data:
            raise ValidationError(
                message=MESSAGE_NO_FILE,
                error_code=ERROR_CODE_NO_FILE_PROVIDED,
            )

        content_type = resolve_content_type(file.content_type, file.file_name, file.data)
        if not is_image_mime_type(content_type):
            logger.warning("Unsupported MIME type", extra={"mime_type": content_type})
            raise ValidationError(
                message=MESSAGE_ONLY_IMAGES,
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
                details={"mime_type": content_type},
            )

        if len(file.data) > MAX_FILE_SIZE:
            raise ValidationError(
                message=f"File size exceeds {get_max_file_size_mb()}MB limit",
                error_code=ERROR_CODE_FILE_SIZE_EXCEEDED,
                details={"size": format_file_size(len(file.data))},
            )

        return content_type

    def upload(self, file: UploadedFile | None) -> ImageUploadResponse:
        """Store an uploaded image and describe where it lives.

        The upload flow is:
        1. Validate presence, MIME type and size
        2. Load storage configuration (no network yet)
        3. Ensure the container exists with public object read
        4. Write the bytes under a fresh ``<uuid>.<ext>`` key

        No retry is attempted; a failed write surfaces to the caller.

        Raises:
            ValidationError: If the file is missing or not an image
            ConfigurationError: If storage configuration is absent
            StorageError: If container creation or the write fails
        """
        content_type = self.validate_file(file)
        store = self._store_factory()

        stored = StoredObject(
            key=self.generate_filename(extension_for(content_type, file.file_name)),
            content_type=content_type,
            data=file.data,
            cache_control=CACHE_CONTROL_IMMUTABLE,
            metadata={METADATA_UPLOADED_AT: utc_now_iso()},
        )

        logger.debug(
            "Starting image upload",
            extra={"key": stored.key, "content_type": content_type, "size": len(stored.data)},
        )

        store.ensure_container()
        url = store.put(
            key=stored.key,
            data=stored.data,
            content_type=stored.content_type,
            cache_control=stored.cache_control,
            metadata=stored.metadata,
        )

        logger.info("Image uploaded successfully", extra={"key": stored.key, "url": url})
        return ImageUploadResponse(
            message=MESSAGE_UPLOAD_SUCCESS,
            filename=stored.key,
            url=url,
        )
