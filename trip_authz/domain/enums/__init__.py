"""Domain enums package.

Usage:
    from trip_authz.domain.enums import Decision, ResourceType
"""

from trip_authz.domain.enums.authorization_strategy import AuthorizationStrategy
from trip_authz.domain.enums.decision import Decision
from trip_authz.domain.enums.permission import PERMISSIONS, ResourceType, is_valid_action

__all__ = [
    "AuthorizationStrategy",
    "Decision",
    "PERMISSIONS",
    "ResourceType",
    "is_valid_action",
]
