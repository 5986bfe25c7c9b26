"""Shared upload models."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.utils.constants import CACHE_CONTROL_IMMUTABLE


class StoredObject(BaseModel):
    """An object written to the upload bucket."""

    model_config = ConfigDict(frozen=True)

    key: StrictStr = Field(..., description="Generated object key (<uuid>.<ext>)")
    content_type: StrictStr = Field(..., description="MIME type served with the object")
    data: bytes = Field(..., repr=False, description="Object content")
    cache_control: StrictStr = Field(CACHE_CONTROL_IMMUTABLE)
    metadata: dict[str, str] = Field(default_factory=dict)


class UploadResponse(BaseModel):
    """Envelope returned by POST /api/upload on success."""

    message: StrictStr = Field(..., description="Success message")
    filename: StrictStr = Field(..., description="Generated object key, not the original name")
    url: StrictStr = Field(..., description="Public URL of the stored object")
