"""
API Gateway proxy responses for the upload endpoint.

Successful uploads return the flat ``{message, filename, url}`` body. Every
failure uses one envelope: ``{error, message, timestamp, details?, request_id?}``.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.models.errors import ImageServiceError
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_INTERNAL_ERROR,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]

RESPONSE_HEADERS: dict[str, str] = {
    "Content-Type": DEFAULT_CONTENT_TYPE,
    "Access-Control-Allow-Origin": CORS_ORIGIN,
    "Access-Control-Allow-Headers": CORS_HEADERS,
    "Access-Control-Allow-Methods": CORS_METHODS,
}


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    @staticmethod
    def _response(status: HTTPStatus, body: JsonDict | None) -> JsonDict:
        return {
            "statusCode": status.value,
            "headers": dict(RESPONSE_HEADERS),
            "body": "" if body is None else json.dumps(body),
        }

    @staticmethod
    def ok(body: JsonDict, *, request_id: str | None = None) -> JsonDict:
        if request_id:
            body = {**body, "request_id": request_id}
        return ResponseBuilder._response(HTTPStatus.OK, body)

    @staticmethod
    def no_content() -> JsonDict:
        """Answer for CORS preflight requests."""
        return ResponseBuilder._response(HTTPStatus.NO_CONTENT, None)

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
    ) -> JsonDict:
        """Build the error envelope. ``error`` defaults to the status name."""
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details
        if request_id:
            payload["request_id"] = request_id

        return ResponseBuilder._response(status, payload)

    @staticmethod
    def bad_request(message: str, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(status=HTTPStatus.BAD_REQUEST, message=message, **kwargs)

    @staticmethod
    def internal_error(message: str = "Internal server error", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, **kwargs
        )

    @staticmethod
    def from_exception(exc: Exception, *, request_id: str | None = None) -> JsonDict:
        """Build the error envelope for an exception.

        Domain errors keep their status, code and details. Anything else
        becomes a 500 carrying the exception's own message.
        """
        if isinstance(exc, ImageServiceError):
            return ResponseBuilder.error(
                status=exc.status,
                error=exc.error_code,
                message=exc.message,
                details=exc.details,
                request_id=request_id,
            )

        return ResponseBuilder.internal_error(
            str(exc) or "Unknown error",
            error=ERROR_CODE_INTERNAL_ERROR,
            request_id=request_id,
        )
