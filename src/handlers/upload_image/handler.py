"""
Lambda handler for POST /api/upload.

Accepts one image per request, either as multipart form data (field ``file``)
or as a JSON body ``{"base64Image": ..., "fileName": ...}``, stores it in the
public upload bucket and returns ``{"message", "filename", "url"}``.
"""

import base64
import binascii
import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ConfigurationError, StorageError, ValidationError
from core.utils.constants import (
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_INVALID_ENCODING,
    ERROR_CODE_NO_FILE_PROVIDED,
    ERROR_CODE_UNSUPPORTED_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    MESSAGE_NO_FILE,
    MESSAGE_NO_IMAGE_DATA,
    METRICS_NAMESPACE,
    MULTIPART_CONTENT_TYPE,
    SERVICE_NAME,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import Base64UploadRequest, UploadedFile, parse_multipart
from .service import UploadService

logger = Logger(service=SERVICE_NAME, UTC=True)
tracer = Tracer(service=SERVICE_NAME)
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)


def _headers(event: dict[str, Any]) -> dict[str, str]:
    """Lower-case header names; API Gateway preserves client casing."""
    return {str(k).lower(): str(v) for k, v in (event.get("headers") or {}).items()}


def _read_body(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError(
                message="Request body is not valid base64",
                error_code=ERROR_CODE_INVALID_ENCODING,
            ) from exc

    return body.encode("utf-8") if isinstance(body, str) else bytes(body)


def _decode_json(raw: bytes) -> UploadedFile:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError(
            message="Invalid JSON body",
            error_code=ERROR_CODE_INVALID_ENCODING,
        ) from exc

    request = validate_request(Base64UploadRequest, payload)
    uploaded = request.to_uploaded_file()
    if uploaded is None:
        raise ValidationError(
            message=MESSAGE_NO_IMAGE_DATA,
            error_code=ERROR_CODE_NO_FILE_PROVIDED,
        )
    return uploaded


def extract_uploaded_file(event: dict[str, Any]) -> UploadedFile | None:
    """Decode the file carried by an API Gateway proxy event.

    Returns ``None`` when the request carries no file at all.

    Raises:
        ValidationError: On malformed bodies or unsupported content types
        pydantic.ValidationError: On JSON bodies that fail model validation
    """
    raw = _read_body(event)
    if not raw:
        return None

    content_type = _headers(event).get("content-type") or DEFAULT_CONTENT_TYPE
    mime = content_type.split(";", 1)[0].strip().lower()

    if mime == MULTIPART_CONTENT_TYPE:
        return parse_multipart(raw, content_type)

    if mime == DEFAULT_CONTENT_TYPE or mime.endswith("+json"):
        return _decode_json(raw)

    raise ValidationError(
        message="Unsupported content type",
        error_code=ERROR_CODE_UNSUPPORTED_CONTENT_TYPE,
        details={"content_type": mime},
    )


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    Expected API Gateway event structure:
    {
        "headers": {"Content-Type": "multipart/form-data; boundary=..."},
        "body": "...",              # raw or base64-encoded request body
        "isBase64Encoded": true
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response with the public URL of the image
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received image upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "content_type": _headers(event).get("content-type"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
        },
    )

    try:
        uploaded = extract_uploaded_file(event)
        if uploaded is None:
            raise ValidationError(
                message=MESSAGE_NO_FILE,
                error_code=ERROR_CODE_NO_FILE_PROVIDED,
            )

        response = UploadService().upload(uploaded)

    except PydanticValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.bad_request(
            message="Invalid request params",
            error=ERROR_CODE_VALIDATION_FAILED,
            details={"errors": sanitize_validation_errors(list(exc.errors()))},
            request_id=request_id,
        )

    except ValidationError as exc:
        logger.warning(
            "Validation error during image upload",
            extra={"error_code": exc.error_code, "error": exc.message},
        )
        return ResponseBuilder.from_exception(exc, request_id=request_id)

    except ConfigurationError as exc:
        logger.exception("Storage is not configured")
        return ResponseBuilder.from_exception(exc, request_id=request_id)

    except StorageError as exc:
        logger.exception("Storage error during image upload")
        return ResponseBuilder.from_exception(exc, request_id=request_id)

    metrics.add_metric(name="ImageUploaded", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name="UploadedBytes", unit=MetricUnit.Bytes, value=len(uploaded.data))

    return ResponseBuilder.ok(response.model_dump())
