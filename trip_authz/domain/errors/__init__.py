"""Domain errors package.

Usage:
    from trip_authz.domain.errors import PolicyServiceError, StoreUnavailableError
"""

from trip_authz.domain.errors.policy_error import (
    PolicyServiceError,
    PolicyServiceRejectedError,
    PolicyServiceUnavailableError,
    PolicySyncError,
)
from trip_authz.domain.errors.store_error import StoreUnavailableError

__all__ = [
    "PolicyServiceError",
    "PolicyServiceRejectedError",
    "PolicyServiceUnavailableError",
    "PolicySyncError",
    "StoreUnavailableError",
]
