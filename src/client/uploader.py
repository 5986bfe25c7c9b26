"""Client-side upload trigger.

Packages a selected file as multipart form data, issues exactly one POST to
the upload endpoint and keeps the outcome as an ``UploadState``. Calls are not
deduplicated; callers disable repeat triggers while ``busy``.
"""

import threading

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.models.upload import UploadResponse
from core.utils.constants import (
    CLIENT_SERVICE_NAME,
    MESSAGE_ONLY_IMAGES,
    MULTIPART_FILE_FIELD,
    UPLOAD_API_PATH,
)
from core.utils.mime import is_image_mime_type

from .api import ApiClient, ApiError
from .models import SelectedFile, UploadState, UploadStatus

logger = Logger(service=CLIENT_SERVICE_NAME)

GENERIC_UPLOAD_ERROR = "Failed to upload file"
READ_FILE_ERROR = "Failed to read file"
NO_FILE_SELECTED = "No file selected"


class ImageUploader:
    """Uploads one image per call and exposes busy flag, last error and result."""

    def __init__(self, api: ApiClient, *, path: str = UPLOAD_API_PATH) -> None:
        self._api = api
        self._path = path
        self._lock = threading.Lock()
        self._in_flight = 0
        self._state = UploadState.idle()

    @property
    def state(self) -> UploadState:
        return self._state

    @property
    def status(self) -> UploadStatus:
        return self._state.status

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def result(self) -> UploadResponse | None:
        return self._state.response

    def reset(self) -> None:
        """Forget the last outcome. An upload still in flight keeps running."""
        with self._lock:
            self._state = UploadState.in_progress() if self._in_flight else UploadState.idle()

    def _set_state(self, state: UploadState) -> None:
        with self._lock:
            self._state = state

    def _fail(self, message: str) -> None:
        self._set_state(UploadState.failed(message))

    def upload(self, file: SelectedFile | None) -> UploadResponse | None:
        """Upload ``file`` and return the endpoint's response, or ``None`` on failure.

        Non-image files and unreadable files fail locally without any request.
        """
        if file is None:
            self._fail(NO_FILE_SELECTED)
            return None

        if not is_image_mime_type(file.content_type):
            self._fail(MESSAGE_ONLY_IMAGES)
            return None

        try:
            data = file.read_bytes()
        except OSError:
            logger.exception("Could not read selected file", extra={"file_name": file.name})
            self._fail(READ_FILE_ERROR)
            return None

        with self._lock:
            self._in_flight += 1
            self._state = UploadState.in_progress()

        try:
            body = self._api.post(
                self._path,
                files={MULTIPART_FILE_FIELD: (file.name, data, file.content_type)},
            )
            response = UploadResponse.model_validate(body)

        except ApiError as exc:
            self._fail(exc.message or GENERIC_UPLOAD_ERROR)
            return None

        except PydanticValidationError:
            logger.error("Upload API returned an unexpected body")
            self._fail(GENERIC_UPLOAD_ERROR)
            return None

        except Exception:
            logger.exception("Unexpected error during upload")
            self._fail(GENERIC_UPLOAD_ERROR)
            return None

        finally:
            with self._lock:
                self._in_flight -= 1

        logger.info("Upload finished", extra={"filename": response.filename})
        self._set_state(UploadState.succeeded(response))
        return response
