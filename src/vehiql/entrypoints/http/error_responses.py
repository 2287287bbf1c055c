"""REST API error response models.

Documents the body produced by the exception handlers so it shows up in
the OpenAPI schema.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error inside a validation failure."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "images",
                "message": "No valid image URLs provided",
                "code": "INVALID_URL",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {"detail": "Listing with identifier '...' not found", "code": "NOT_FOUND"}

        Validation error:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [{"field": "images", "message": "No images provided", "code": "REQUIRED"}]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Admin access required", "code": "FORBIDDEN"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "images",
                            "message": "No images provided",
                            "code": "REQUIRED",
                        }
                    ],
                },
            ]
        }
    )


ERROR_RESPONSES: dict[int | str, dict] = {
    401: {"model": ErrorResponse, "description": "Authentication required"},
    403: {"model": ErrorResponse, "description": "Admin access required"},
    404: {"model": ErrorResponse, "description": "Listing not found"},
    422: {"model": ErrorResponse, "description": "Validation error"},
    503: {"model": ErrorResponse, "description": "Listing store unavailable"},
}
