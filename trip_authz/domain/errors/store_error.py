"""Relational store error types.

Returned (inside ``Failure``) when the relational store backing roles and
role assignments cannot be reached or queried.

Usage:
    from trip_authz.domain.errors import StoreUnavailableError

    return Failure(error=StoreUnavailableError(
        code=ErrorCode.STORE_UNAVAILABLE,
        message="Role directory could not be loaded",
        operation="load_roles",
    ))
"""

from dataclasses import dataclass

from trip_authz.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreUnavailableError(DomainError):
    """Relational store unreachable or failing.

    Attributes:
        operation: Store operation that failed (load_roles, get_assignment, ...).
    """

    operation: str | None = None
