from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from client.api import ApiClient


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """
    Build a fake requests.Response.

    Usage:
        response = make_response(200, {"url": "..."})
        response = make_response(502, text="Bad Gateway")
    """

    def _make(status_code: int, body: Any = None, text: str = "") -> MagicMock:
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.text = text
        if body is None:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = body
        return response

    return _make


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api_client(session) -> ApiClient:
    return ApiClient("https://uploads.example/", {"x-api-key": "k"}, session=session)
