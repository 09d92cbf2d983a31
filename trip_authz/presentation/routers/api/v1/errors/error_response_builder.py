"""Error response builder for RFC 9457 Problem Details.

Converts domain errors returned by application services into JSON
responses with the matching HTTP status:

    ValidationError          -> 400
    AuthenticationError      -> 401
    AuthorizationError       -> 403
    NotFoundError            -> 404
    PolicyServiceRejectedError -> 502
    StoreUnavailableError    -> 503
    PolicyServiceUnavailableError -> 503
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from trip_authz.core.errors import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from trip_authz.domain.errors import (
    PolicyServiceRejectedError,
    PolicyServiceUnavailableError,
    StoreUnavailableError,
)
from trip_authz.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int, str], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "Authentication Required"),
    (AuthorizationError, status.HTTP_403_FORBIDDEN, "Access Denied"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "Resource Not Found"),
    (PolicyServiceRejectedError, status.HTTP_502_BAD_GATEWAY, "Policy Service Error"),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE, "Service Unavailable"),
    (
        PolicyServiceUnavailableError,
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Service Unavailable",
    ),
)


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses."""

    @staticmethod
    def from_domain_error(error: DomainError, request: Request) -> JSONResponse:
        """Convert a domain error to a Problem Details JSON response.

        Args:
            error: Error returned in a ``Failure``.
            request: Current request (for the instance path).

        Returns:
            JSONResponse with the mapped status code.
        """
        status_code, title = ErrorResponseBuilder._classify(error)

        problem = ProblemDetails(
            type=f"/errors/{error.code.value}",
            title=title,
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
        )
        if isinstance(error, ValidationError) and error.field:
            problem.errors = [
                ErrorDetail(
                    field=error.field,
                    code=error.code.value,
                    message=error.message,
                )
            ]

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
        )

    @staticmethod
    def _classify(error: DomainError) -> tuple[int, str]:
        for error_type, status_code, title in _STATUS_BY_ERROR:
            if isinstance(error, error_type):
                return status_code, title
        return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
