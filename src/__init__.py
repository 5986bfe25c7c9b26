"""Image Upload Service Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Serverless image upload to public S3 storage using AWS Lambda, "
    "with a Python client for picking and uploading files"
)

__all__ = ["handlers", "core", "client"]
