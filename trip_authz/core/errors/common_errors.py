"""Common error classes shared by every layer.

Error Types:
- ValidationError: Malformed authorization request (surfaced as 400)
- NotFoundError: Mutation target does not exist (404)
- AuthenticationError: No authenticated actor (401)
- AuthorizationError: Authenticated but not permitted (403)

Usage:
    from trip_authz.core.errors import ValidationError
    from trip_authz.core.enums import ErrorCode
    from trip_authz.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.INVALID_ACTION,
        message='Invalid action "fly" for resource "Trip"',
        field="action",
    ))
"""

from dataclasses import dataclass

from trip_authz.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Request validation failure.

    Attributes:
        field: Request field that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (RoleAssignment, Trip, ...).
        resource_id: Identifier of the missing resource.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """No authenticated actor on the request."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authenticated actor lacks the requested permission.

    Attributes:
        required_permission: Permission that was required ("Trip:manage").
    """

    required_permission: str | None = None
