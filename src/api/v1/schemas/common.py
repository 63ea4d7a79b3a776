"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Error body returned for every non-2xx response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "PASSWORD_MISMATCH",
                "message": "Password and repeat password must match",
                "details": None,
            }
        },
    )

    error_code: str
    message: str
    details: Any | None = None
