"""Request/response models for the image upload endpoint.

Two request encodings are accepted: multipart form data with a ``file`` field
(canonical) and a JSON body carrying the image as base64. Both normalise into
an ``UploadedFile``.
"""

import base64
import binascii
from email.message import Message

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator
from requests_toolbelt.multipart.decoder import (
    BodyPart,
    ImproperBodyPartContentException,
    MultipartDecoder,
    NonMultipartContentTypeException,
)

from core.models.errors import ValidationError
from core.models.upload import UploadResponse
from core.utils.constants import (
    ERROR_CODE_INVALID_ENCODING,
    MULTIPART_FILE_FIELD,
)

logger = Logger(UTC=True)


class UploadedFile(BaseModel):
    """A file received by the endpoint, independent of the request encoding."""

    model_config = ConfigDict(frozen=True)

    file_name: str | None = Field(None, description="Client-supplied name, never used as key")
    content_type: str | None = Field(None, description="Declared MIME type")
    data: bytes = Field(..., repr=False, description="Raw file content")


class Base64UploadRequest(BaseModel):
    """JSON upload body: ``{"base64Image": ..., "fileName": ...}``."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    base64_image: str | None = Field(
        None, alias="base64Image", description="Base64 image data or data URL"
    )
    file_name: str | None = Field(
        None, alias="fileName", max_length=255, description="Original file name"
    )

    @field_validator("base64_image")
    @classmethod
    def validate_base64_image(cls, value: str | None) -> str | None:
        """Reject payloads that are not valid base64, accepting data URLs."""
        if not value:
            return None

        _, payload = split_data_url(value)
        try:
            base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        return value

    def to_uploaded_file(self) -> UploadedFile | None:
        """Decode the payload; ``None`` when no image data was sent."""
        if not self.base64_image:
            return None

        declared, payload = split_data_url(self.base64_image)
        data = base64.b64decode(payload)
        if not data:
            return None

        return UploadedFile(
            file_name=self.file_name,
            content_type=declared,
            data=data,
        )


class ImageUploadResponse(UploadResponse):
    """Response model for a successful image upload."""


def split_data_url(value: str) -> tuple[str | None, str]:
    """Split ``data:<mime>;base64,<payload>`` into its MIME type and payload.

    Plain base64 strings come back with no MIME type. Whitespace inside the
    payload is dropped.
    """
    declared: str | None = None
    payload = value

    if value.startswith("data:") and "," in value:
        header, payload = value[len("data:"):].split(",", 1)
        declared = header.split(";", 1)[0].strip() or None

    return declared, "".join(payload.split())


def _header_params(name: str, value: str) -> Message:
    message = Message()
    message[name] = value
    return message


def _part_header(part: BodyPart, name: bytes) -> str:
    return part.headers.get(name, b"").decode(part.encoding, errors="replace")


def parse_multipart(body: bytes, content_type: str) -> UploadedFile | None:
    """Extract the ``file`` field from a multipart/form-data body.

    Returns:
        The uploaded file, or ``None`` when the form has no ``file`` field

    Raises:
        ValidationError: If the body is not well-formed multipart data
    """
    if not _header_params("Content-Type", content_type).get_param("boundary"):
        raise ValidationError(
            message="Multipart boundary is missing",
            error_code=ERROR_CODE_INVALID_ENCODING,
        )

    try:
        decoder = MultipartDecoder(body, content_type)
    except (
        ImproperBodyPartContentException,
        NonMultipartContentTypeException,
        UnicodeDecodeError,
    ) as exc:
        logger.warning("Malformed multipart body", extra={"error": str(exc)})
        raise ValidationError(
            message="Malformed multipart body",
            error_code=ERROR_CODE_INVALID_ENCODING,
        ) from exc

    for part in decoder.parts:
        disposition = _part_header(part, b"Content-Disposition")
        params = _header_params("Content-Disposition", disposition)

        if params.get_param("name", header="content-disposition") != MULTIPART_FILE_FIELD:
            continue

        part_type = _part_header(part, b"Content-Type")
        return UploadedFile(
            file_name=params.get_filename(),
            content_type=part_type or None,
            data=part.content,
        )

    return None
