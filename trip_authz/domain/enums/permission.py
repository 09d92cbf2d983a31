"""Resource types and their permission vocabulary.

Permissions are expressed as resource:action pairs (e.g., "Trip:manage").
The vocabulary below is the single auditable list of legal actions per
resource type; both authorization strategies reject anything outside it
before touching the database or the policy service.

Usage:
    from trip_authz.domain.enums import ResourceType, is_valid_action

    if not is_valid_action(ResourceType.TRIP, "participants.manage"):
        ...
"""

from enum import Enum


class ResourceType(str, Enum):
    """Resources that can be protected by authorization.

    String Enum:
        Values match the type names used in policy facts ("Trip", "Expense").
    """

    TRIP = "Trip"
    """A trip; role assignments are scoped to trips."""

    EXPENSE = "Expense"
    """An expense recorded against a trip."""

    ORGANIZATION = "Organization"
    """The tenant that owns trips."""

    USER = "User"
    """A user account (actor type; carries no permissions of its own)."""


PERMISSIONS: dict[ResourceType, frozenset[str]] = {
    ResourceType.TRIP: frozenset(
        {
            "view",
            "manage",
            "participants.list",
            "participants.manage",
            "expense.create",
            "expense.list",
        }
    ),
    ResourceType.EXPENSE: frozenset({"view", "manage"}),
    ResourceType.ORGANIZATION: frozenset({"trip.create", "trip.list"}),
    ResourceType.USER: frozenset(),
}


def is_valid_action(resource_type: ResourceType, action: str) -> bool:
    """Check that an action belongs to a resource type's vocabulary.

    Args:
        resource_type: Resource type being accessed.
        action: Requested action name.

    Returns:
        bool: True if the action is declared for the resource type.
    """
    return action in PERMISSIONS.get(resource_type, frozenset())
