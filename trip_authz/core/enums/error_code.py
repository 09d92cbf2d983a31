"""Machine-readable error codes.

Codes follow the ENTITY_REASON naming convention and travel inside
``DomainError`` values through ``Result`` types.

Categories:
- Request validation (INVALID_*, *_REQUIRED, UNSUPPORTED_*)
- Resource errors (*_NOT_FOUND)
- Authentication / authorization
- Infrastructure (STORE_*, POLICY_SERVICE_*, POLICY_SYNC_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable error codes."""

    # Request validation
    VALIDATION_FAILED = "validation_failed"
    INVALID_ACTION = "invalid_action"
    RESOURCE_ID_REQUIRED = "resource_id_required"
    UNSUPPORTED_RESOURCE_TYPE = "unsupported_resource_type"
    WILDCARD_NOT_ALLOWED = "wildcard_not_allowed"
    ROLE_NOT_FOUND = "role_not_found"

    # Resource errors
    ROLE_ASSIGNMENT_NOT_FOUND = "role_assignment_not_found"
    TRIP_NOT_FOUND = "trip_not_found"
    USER_NOT_FOUND = "user_not_found"

    # Authentication / authorization
    AUTHENTICATION_REQUIRED = "authentication_required"
    PERMISSION_DENIED = "permission_denied"

    # Infrastructure
    STORE_UNAVAILABLE = "store_unavailable"
    POLICY_SERVICE_UNAVAILABLE = "policy_service_unavailable"
    POLICY_SERVICE_REJECTED = "policy_service_rejected"
    POLICY_SYNC_FAILED = "policy_sync_failed"
