"""Request validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input (which may hold the whole base64 payload)
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        err_type = str(err.get("type", ""))
        if "base64" in msg_lower:
            msg = "File must be a valid Base64-encoded string"
        elif "field required" in msg_lower:
            msg = "This field is required"
        elif err_type.endswith("_type") or "type" in msg_lower:
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: Any) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        pydantic.ValidationError: If the payload does not match the model
    """
    return model.model_validate(data)
