"""MIME type helpers shared by the upload endpoint and the client."""

from collections.abc import Mapping
import mimetypes
from pathlib import PurePosixPath

from core.utils.constants import (
    DEFAULT_EXTENSION,
    IMAGE_MIME_PREFIX,
    MIME_TYPE_EXTENSION_MAP,
)

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"BM": "image/bmp",
    b"\x00\x00\x01\x00": "image/x-icon",
}


def detect_mime_type(file_data: bytes) -> str:
    """Sniff the image type from the leading bytes."""
    # RIFF container; only the WEBP form is an image
    if file_data[:4] == b"RIFF" and file_data[8:12] == b"WEBP":
        return "image/webp"

    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")


def is_image_mime_type(value: str | None) -> bool:
    return bool(value) and value.strip().lower().startswith(IMAGE_MIME_PREFIX)


def guess_content_type(file_name: str | None) -> str | None:
    """Guess a MIME type from the file name extension."""
    if not file_name:
        return None

    suffix = _suffix(file_name)
    for mime, extensions in MIME_TYPE_EXTENSION_MAP.items():
        if suffix in extensions:
            return mime

    guessed, _ = mimetypes.guess_type(file_name, strict=False)
    return guessed


def resolve_content_type(
    declared: str | None,
    file_name: str | None,
    file_data: bytes,
) -> str | None:
    """Pick the content type of an uploaded file.

    The declared type wins, then the extension, then magic-byte sniffing.
    Generic ``application/octet-stream`` declarations are treated as absent.
    """
    if declared:
        mime = declared.split(";", 1)[0].strip().lower()
        if mime and mime != "application/octet-stream":
            return mime

    guessed = guess_content_type(file_name)
    if guessed:
        return guessed

    try:
        return detect_mime_type(file_data)
    except ValueError:
        return None


def extension_for(content_type: str, file_name: str | None = None) -> str:
    """Return the extension used for the generated object key.

    The original extension is kept only when it is a plain alphanumeric
    suffix that maps to ``content_type``; otherwise it is derived from the
    content type.
    """
    suffix = _suffix(file_name) if file_name else ""
    if (
        suffix
        and suffix.isascii()
        and suffix.isalnum()
        and guess_content_type(file_name) == content_type
    ):
        return suffix

    extensions = MIME_TYPE_EXTENSION_MAP.get(content_type)
    if extensions:
        return extensions[0]

    subtype = content_type.partition("/")[2].split("+", 1)[0]
    if subtype and subtype.isascii() and subtype.isalnum():
        return subtype.lower()

    return DEFAULT_EXTENSION


def _suffix(file_name: str) -> str:
    # Client names may carry Windows separators
    name = PurePosixPath(file_name.replace("\\", "/")).name
    return PurePosixPath(name).suffix.lower().lstrip(".")
