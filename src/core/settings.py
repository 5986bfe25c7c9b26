"""Storage configuration read from the Lambda environment."""

import os

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field

from core.models.errors import ConfigurationError
from core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_ACCESS_KEY_ID,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_AWS_SECRET_ACCESS_KEY,
    ENV_AWS_SESSION_TOKEN,
    MESSAGE_CONFIGURATION_MISSING,
    UPLOAD_BUCKET_NAME,
)

logger = Logger(UTC=True)


class StorageSettings(BaseModel):
    """Everything needed to reach the upload bucket."""

    model_config = ConfigDict(frozen=True)

    bucket_name: str = Field(..., min_length=1, description="Destination bucket")
    access_key_id: str = Field(..., min_length=1, repr=False)
    secret_access_key: str = Field(..., min_length=1, repr=False)
    session_token: str | None = Field(None, repr=False)
    region: str = Field(DEFAULT_AWS_REGION, description="AWS region of the bucket")
    endpoint_url: str | None = Field(
        None, description="Custom S3 endpoint, e.g. LocalStack"
    )


def load_storage_settings(bucket_name: str = UPLOAD_BUCKET_NAME) -> StorageSettings:
    """Build storage settings from environment variables.

    Raises:
        ConfigurationError: If the bucket name or the credential pair is absent
    """
    access_key_id = os.getenv(ENV_AWS_ACCESS_KEY_ID, "").strip()
    secret_access_key = os.getenv(ENV_AWS_SECRET_ACCESS_KEY, "").strip()

    missing = [
        name
        for name, value in (
            ("bucket_name", bucket_name),
            (ENV_AWS_ACCESS_KEY_ID, access_key_id),
            (ENV_AWS_SECRET_ACCESS_KEY, secret_access_key),
        )
        if not value
    ]
    if missing:
        logger.error("Storage configuration incomplete", extra={"missing": missing})
        raise ConfigurationError(message=MESSAGE_CONFIGURATION_MISSING)

    return StorageSettings(
        bucket_name=bucket_name,
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=os.getenv(ENV_AWS_SESSION_TOKEN) or None,
        region=os.getenv(ENV_AWS_REGION) or DEFAULT_AWS_REGION,
        endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL) or None,
    )
