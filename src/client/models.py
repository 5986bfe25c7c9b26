"""Client-side models for file selection and upload state."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.models.upload import UploadResponse
from core.utils.mime import guess_content_type


class SelectedFile(BaseModel):
    """A file picked by the user, held in memory or read lazily from disk."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Original file name")
    content_type: str = Field("", description="MIME type reported for the file")
    size: int = Field(..., ge=0, description="Size in bytes")
    content: bytes | None = Field(None, repr=False)
    path: Path | None = None

    @model_validator(mode="after")
    def check_source(self) -> "SelectedFile":
        if self.content is None and self.path is None:
            raise ValueError("Either content or path is required")
        return self

    @classmethod
    def from_bytes(cls, name: str, content: bytes, content_type: str | None = None) -> "SelectedFile":
        return cls(
            name=name,
            content_type=content_type or guess_content_type(name) or "",
            size=len(content),
            content=content,
        )

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "SelectedFile":
        """Describe a file on disk without reading it.

        Raises:
            OSError: If the file cannot be stat'ed
        """
        path = Path(path)
        return cls(
            name=path.name,
            content_type=content_type or guess_content_type(path.name) or "",
            size=path.stat().st_size,
            path=path,
        )

    def read_bytes(self) -> bytes:
        """Return the file content.

        Raises:
            OSError: If the file on disk cannot be read
        """
        if self.content is not None:
            return self.content
        return self.path.read_bytes()


class UploadStatus(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class UploadState(BaseModel):
    """Outcome of the latest upload: Idle, InProgress, Succeeded or Failed.

    ``response`` is only set when succeeded, ``error`` only when failed.
    """

    model_config = ConfigDict(frozen=True)

    status: UploadStatus = UploadStatus.IDLE
    response: UploadResponse | None = None
    error: str | None = None

    @classmethod
    def idle(cls) -> "UploadState":
        return cls()

    @classmethod
    def in_progress(cls) -> "UploadState":
        return cls(status=UploadStatus.IN_PROGRESS)

    @classmethod
    def succeeded(cls, response: UploadResponse) -> "UploadState":
        return cls(status=UploadStatus.SUCCEEDED, response=response)

    @classmethod
    def failed(cls, error: str) -> "UploadState":
        return cls(status=UploadStatus.FAILED, error=error)
