"""Core errors package.

Usage:
    from trip_authz.core.errors import DomainError, ValidationError, NotFoundError
"""

from trip_authz.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from trip_authz.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "AuthenticationError",
    "AuthorizationError",
]
