from importlib.metadata import PackageNotFoundError, version

from pydantic import BaseModel, Field

API_TITLE = "badgecount API"
API_SUMMARY = "View counter badges rendered as SVG"


def get_api_version() -> str:
    try:
        return version("badgecount")
    except PackageNotFoundError:
        return "0.0.0"


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Badge not found", "type": "not_found"},
                {"message": "Label contains control characters", "type": "invalid_label"},
                {"message": "Service temporarily unavailable.", "type": "service_unavailable"},
            ]
        }
    }
