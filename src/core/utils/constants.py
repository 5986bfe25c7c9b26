"""Global constants used throughout the application.

This module centralizes the error codes, upload constraints, storage settings
and environment variable names shared by the upload endpoint and the client.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_NO_FILE_PROVIDED = "NO_FILE_PROVIDED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_UNSUPPORTED_CONTENT_TYPE = "UNSUPPORTED_CONTENT_TYPE"
ERROR_CODE_INVALID_ENCODING = "INVALID_ENCODING"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"

# Configuration Errors
ERROR_CODE_CONFIGURATION_MISSING = "CONFIGURATION_MISSING"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_CONTAINER_CREATE_FAILED = "CONTAINER_CREATE_FAILED"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# User-facing Messages
# ============================================================================

MESSAGE_UPLOAD_SUCCESS = "Image uploaded successfully"
MESSAGE_NO_FILE = "No file provided"
MESSAGE_NO_IMAGE_DATA = "No image data provided"
MESSAGE_ONLY_IMAGES = "Only image files are allowed"
MESSAGE_CONFIGURATION_MISSING = "Storage configuration is missing"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 4 * 1024 * 1024  # 4MB in bytes

IMAGE_MIME_PREFIX: Final = "image/"

MULTIPART_FILE_FIELD: Final = "file"

MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
    "image/svg+xml": ("svg",),
    "image/bmp": ("bmp",),
    "image/x-icon": ("ico",),
    "image/avif": ("avif",),
}

DEFAULT_EXTENSION: Final = "bin"


# ============================================================================
# Storage
# ============================================================================

UPLOAD_BUCKET_NAME: Final = "image-uploads"

CACHE_CONTROL_IMMUTABLE: Final = "public, max-age=31536000"

METADATA_UPLOADED_AT: Final = "uploadedAt"

DEFAULT_AWS_REGION: Final = "us-east-1"


# ============================================================================
# API Gateway Configuration
# ============================================================================

UPLOAD_API_PATH = "/api/upload"

CORS_ORIGIN = "*"
CORS_METHODS = "POST,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
DEFAULT_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_AWS_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_AWS_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_AWS_SESSION_TOKEN = "AWS_SESSION_TOKEN"


# ============================================================================
# Observability
# ============================================================================

SERVICE_NAME = "image-upload"
CLIENT_SERVICE_NAME = "upload-client"
METRICS_NAMESPACE = "ImageUpload"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"
