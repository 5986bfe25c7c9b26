""" """

import base64
import logging
import os

import pytest

from client.api import ApiClient
from client.models import SelectedFile
from client.uploader import ImageUploader

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

# 1x1 pixel PNG (minimal valid image)
SAMPLE_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "e2e" in item.path.parts:
            item.add_marker(pytest.mark.e2e)


# ============================================================================
# API Details Fixture
# ============================================================================


@pytest.fixture(scope="session")
def api_details():
    """Endpoint of a running upload API, taken from the environment"""
    endpoint = os.getenv("UPLOAD_API_URL")
    if not endpoint:
        pytest.skip("UPLOAD_API_URL is not set")

    logger.info("Running e2e tests against %s", endpoint)
    return {"endpoint": endpoint, "api_key": os.getenv("UPLOAD_API_KEY")}


@pytest.fixture(scope="session")
def api_headers(api_details):
    """Default HTTP headers for API requests"""
    return {"x-api-key": api_details["api_key"]} if api_details["api_key"] else {}


@pytest.fixture
def api_client(api_details, api_headers):
    """HTTP client wrapper for E2E API testing"""
    _client = ApiClient(api_details["endpoint"], api_headers)
    yield _client
    _client.session.close()


@pytest.fixture
def uploader(api_client) -> ImageUploader:
    return ImageUploader(api_client)


@pytest.fixture
def sample_png_bytes() -> bytes:
    return base64.b64decode(SAMPLE_PNG_BASE64)


@pytest.fixture
def sample_png(sample_png_bytes) -> SelectedFile:
    return SelectedFile.from_bytes("sample.png", sample_png_bytes)
