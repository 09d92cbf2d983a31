"""Problem Details (RFC 9457) response schemas."""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Field-specific error attached to a validation failure."""

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """Problem Details error response.

    Attributes:
        type: URI reference identifying the problem type.
        title: Short, human-readable summary of the problem type.
        status: HTTP status code for this occurrence.
        detail: Human-readable explanation specific to this occurrence.
        instance: Request path of the failing occurrence.
        errors: Field-specific errors (validation failures only).

    Examples:
        >>> problem = ProblemDetails(
        ...     type="/errors/trip_not_found",
        ...     title="Resource Not Found",
        ...     status=404,
        ...     detail="Trip not found",
        ...     instance="/api/v1/trips/t1/participants",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["/errors/role_not_found"],
    )
    title: str = Field(..., description="Short, human-readable summary")
    status: int = Field(..., description="HTTP status code", examples=[400])
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/trips/t1/participants"],
    )
    errors: list[ErrorDetail] | None = Field(
        default=None,
        description="Field-specific errors",
    )
