"""Policy service error types for the PolicyClientProtocol contract.

These errors define the failure cases a policy client implementation can
return. Evaluators turn them into Deny; the synchronizer wraps them into
PolicySyncError and records the drift for reconciliation.

Architecture:
- Domain layer errors (part of protocol contract)
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)

Usage:
    from trip_authz.domain.errors import PolicyServiceUnavailableError

    return Failure(error=PolicyServiceUnavailableError(
        code=ErrorCode.POLICY_SERVICE_UNAVAILABLE,
        message="Policy service request timed out",
    ))
"""

from dataclasses import dataclass

from trip_authz.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyServiceError(DomainError):
    """Base policy service error.

    Attributes:
        endpoint: Service endpoint that failed ("api/authorize", "api/batch").
    """

    endpoint: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyServiceUnavailableError(PolicyServiceError):
    """Transport failure or timeout talking to the policy service."""

    is_timeout: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyServiceRejectedError(PolicyServiceError):
    """Policy service answered with a non-success status.

    Attributes:
        status_code: HTTP status returned by the service.
    """

    status_code: int


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicySyncError(DomainError):
    """Fact synchronization failed after the local change was committed.

    The local store and the policy service now disagree until the drift is
    reconciled.

    Attributes:
        operation: Synchronizer operation that failed.
        trip_id: Trip whose facts may be stale, when applicable.
        cause: Underlying policy service error.
    """

    operation: str
    trip_id: str | None = None
    cause: PolicyServiceError | None = None
