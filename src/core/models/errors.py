"""Custom exception classes for the image upload service."""

from http import HTTPStatus
from typing import Any, ClassVar

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION_MISSING,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_STORAGE,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all image service errors.

    Each subclass declares the HTTP status it maps to and the error code used
    when the caller does not pass one. Optional contextual information can be
    supplied via `details`; it is returned to the client as-is.
    """

    status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code: ClassVar[str] = ERROR_CODE_INTERNAL_ERROR

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when the upload request is missing data or carries a non-image file."""

    status = HTTPStatus.BAD_REQUEST
    default_error_code = ERROR_CODE_VALIDATION_FAILED


class ConfigurationError(ImageServiceError):
    """Raised when storage credentials are absent."""

    default_error_code = ERROR_CODE_CONFIGURATION_MISSING


class StorageError(ImageServiceError):
    """Raised when a blob storage operation fails."""

    default_error_code = ERROR_CODE_STORAGE
