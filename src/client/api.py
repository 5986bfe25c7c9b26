"""Thin HTTP wrapper for calling the upload API."""

from typing import Any

from aws_lambda_powertools import Logger
import requests

from core.utils.constants import CLIENT_SERVICE_NAME

logger = Logger(service=CLIENT_SERVICE_NAME)

DEFAULT_TIMEOUT = 30


class ApiError(Exception):
    """Raised for transport failures and non-2xx API answers."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: requests.Response) -> str:
    """Pull a readable message out of an error envelope."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Request failed with status {response.status_code}"

    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value

    return f"Request failed with status {response.status_code}"


class ApiClient:
    """Wrapper for making HTTP requests to the API"""

    def __init__(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.session = session or requests.Session()

    def post(
        self,
        path: str,
        *,
        json: Any = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Make POST request and return the decoded JSON body.

        Raises:
            ApiError: On connection failures, non-2xx answers or non-JSON bodies
        """
        url = f"{self.endpoint}{path}"
        h = self.headers.copy()
        if headers:
            h.update(headers)

        try:
            response = self.session.post(
                url, json=json, files=files, headers=h, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Request failed", extra={"url": url, "error": str(exc)})
            raise ApiError(str(exc) or "Network request failed") from exc

        if not response.ok:
            message = _error_message(response)
            logger.warning(
                "API returned an error",
                extra={"url": url, "status_code": response.status_code, "error": message},
            )
            raise ApiError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise ApiError(
                "Response is not valid JSON", status_code=response.status_code
            ) from exc

        if not isinstance(body, dict):
            raise ApiError("Unexpected response shape", status_code=response.status_code)

        return body
