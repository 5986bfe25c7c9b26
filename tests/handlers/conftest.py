import base64
import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest
from requests_toolbelt.multipart.encoder import MultipartEncoder

EventFactory = Callable[..., dict[str, Any]]


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def json_upload_event() -> EventFactory:
    """Build a JSON upload event.

    Usage:
        event = json_upload_event({"base64Image": "...", "fileName": "x.png"})
    """

    def _build(payload: Any) -> dict[str, Any]:
        return {
            "httpMethod": "POST",
            "path": "/api/upload",
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps(payload),
            "isBase64Encoded": False,
        }

    return _build


@pytest.fixture
def multipart_upload_event() -> EventFactory:
    """Build a multipart upload event the way API Gateway delivers binary bodies.

    Usage:
        event = multipart_upload_event({"file": ("x.png", data, "image/png")})
    """

    def _build(fields: dict[str, Any]) -> dict[str, Any]:
        encoder = MultipartEncoder(fields=fields)
        return {
            "httpMethod": "POST",
            "path": "/api/upload",
            "headers": {"content-type": encoder.content_type},
            "body": base64.b64encode(encoder.to_string()).decode("utf-8"),
            "isBase64Encoded": True,
        }

    return _build


@pytest.fixture
def upload_image_event(json_upload_event, sample_png_base64) -> dict[str, Any]:
    return json_upload_event({"base64Image": sample_png_base64, "fileName": "x.png"})
