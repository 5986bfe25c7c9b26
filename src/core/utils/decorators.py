"""
Decorator shared by the API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import ImageServiceError
from core.utils.constants import SERVICE_NAME
from core.utils.response import JsonDict, ResponseBuilder

logger = Logger(service=SERVICE_NAME, UTC=True)


def _error_context(func: Callable[..., Any], request_id: str | None, exc: Exception) -> JsonDict:
    return {
        "handler": func.__name__,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Answers CORS preflight (OPTIONS) requests without calling the handler and
    turns anything the handler raises into the error envelope, so no exception
    reaches the Lambda runtime. Domain errors keep their status; any other
    exception becomes a 500 whose message is the exception's own message.

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"message": "done"})
    """

    @wraps(func)
    def wrapper(event: Any, context: Any) -> JsonDict:
        if (event or {}).get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content()

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except ImageServiceError as exc:
            logger.warning("Service error escaped handler", extra=_error_context(func, request_id, exc))
            return ResponseBuilder.from_exception(exc, request_id=request_id)

        except Exception as exc:
            logger.exception("Unexpected error in handler", extra=_error_context(func, request_id, exc))
            return ResponseBuilder.from_exception(exc, request_id=request_id)

    return wrapper
