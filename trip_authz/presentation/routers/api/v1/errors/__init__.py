"""RFC 9457 problem details for API error responses.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: Problem details response schema
    ErrorResponseBuilder: Builds problem details responses from domain errors
"""

from trip_authz.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from trip_authz.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
]
