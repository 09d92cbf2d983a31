"""Policy fact value objects.

Facts are the relationship/role tuples held by the remote policy service,
e.g. ``has_role(User "u1", String "organizer", Trip "t1")``. A FactPattern
has the same shape but any argument may be a wildcard (``None``), which
matches every value in that position; patterns are only legal in deletes.

Usage:
    from trip_authz.domain.value_objects import has_role, trip_roles_pattern

    fact = has_role(user_id="u1", role_name="organizer", trip_id="t1")
    pattern = trip_roles_pattern(trip_id="t1", user_id="u1")
"""

from dataclasses import dataclass

from trip_authz.core.constants import (
    HAS_RELATION,
    HAS_ROLE,
    ORGANIZATION_MEMBER_ROLE,
    ORGANIZATION_RELATION,
    STRING_TYPE,
    TRIP_RELATION,
    USER_TYPE,
)
from trip_authz.domain.enums import ResourceType


@dataclass(frozen=True, slots=True)
class PolicyValue:
    """Typed value in a fact argument position.

    Attributes:
        type: Value type ("User", "Trip", "String", ...).
        id: Value identifier (role name for String values).
    """

    type: str
    id: str

    def __post_init__(self) -> None:
        """Reject empty type or id.

        Raises:
            ValueError: If type or id is empty.
        """
        if not self.type or not self.id:
            raise ValueError("PolicyValue requires a non-empty type and id")


@dataclass(frozen=True, slots=True)
class PolicyFact:
    """A concrete fact. Every argument is a PolicyValue."""

    predicate: str
    args: tuple[PolicyValue, ...]


@dataclass(frozen=True, slots=True)
class FactPattern:
    """A fact shape where ``None`` arguments match any value."""

    predicate: str
    args: tuple[PolicyValue | None, ...]

    @classmethod
    def from_fact(cls, fact: PolicyFact) -> "FactPattern":
        """Build an exact-match pattern from a fact."""
        return cls(fact.predicate, tuple(fact.args))


def user_value(user_id: str) -> PolicyValue:
    return PolicyValue(USER_TYPE, user_id)


def resource_value(resource_type: ResourceType, resource_id: str) -> PolicyValue:
    return PolicyValue(resource_type.value, resource_id)


def has_role(*, user_id: str, role_name: str, trip_id: str) -> PolicyFact:
    """``has_role(User u, String role, Trip t)``."""
    return PolicyFact(
        HAS_ROLE,
        (
            user_value(user_id),
            PolicyValue(STRING_TYPE, role_name),
            resource_value(ResourceType.TRIP, trip_id),
        ),
    )


def trip_roles_pattern(*, trip_id: str, user_id: str | None = None) -> FactPattern:
    """Match a user's role facts on a trip, or every role fact on it.

    Args:
        trip_id: Trip whose role facts to match.
        user_id: Restrict to one user; None matches every user.

    Returns:
        FactPattern: ``has_role(User u | *, *, Trip t)``.
    """
    return FactPattern(
        HAS_ROLE,
        (
            user_value(user_id) if user_id is not None else None,
            None,
            resource_value(ResourceType.TRIP, trip_id),
        ),
    )


def organization_member(*, user_id: str, organization_id: str) -> PolicyFact:
    """``has_role(User u, String "member", Organization o)``."""
    return PolicyFact(
        HAS_ROLE,
        (
            user_value(user_id),
            PolicyValue(STRING_TYPE, ORGANIZATION_MEMBER_ROLE),
            resource_value(ResourceType.ORGANIZATION, organization_id),
        ),
    )


def trip_organization(*, trip_id: str, organization_id: str) -> PolicyFact:
    """``has_relation(Trip t, String "organization", Organization o)``."""
    return PolicyFact(
        HAS_RELATION,
        (
            resource_value(ResourceType.TRIP, trip_id),
            PolicyValue(STRING_TYPE, ORGANIZATION_RELATION),
            resource_value(ResourceType.ORGANIZATION, organization_id),
        ),
    )


def trip_relations_pattern(*, trip_id: str) -> FactPattern:
    """``has_relation(Trip t, *, *)``."""
    return FactPattern(
        HAS_RELATION,
        (resource_value(ResourceType.TRIP, trip_id), None, None),
    )


def expense_trip(*, expense_id: str, trip_id: str) -> PolicyFact:
    """``has_relation(Expense e, String "trip", Trip t)``."""
    return PolicyFact(
        HAS_RELATION,
        (
            resource_value(ResourceType.EXPENSE, expense_id),
            PolicyValue(STRING_TYPE, TRIP_RELATION),
            resource_value(ResourceType.TRIP, trip_id),
        ),
    )


def expense_relations_pattern(*, expense_id: str) -> FactPattern:
    """``has_relation(Expense e, *, *)``."""
    return FactPattern(
        HAS_RELATION,
        (resource_value(ResourceType.EXPENSE, expense_id), None, None),
    )


def trip_expenses_pattern(*, trip_id: str) -> FactPattern:
    """``has_relation(*, String "trip", Trip t)``."""
    return FactPattern(
        HAS_RELATION,
        (
            None,
            PolicyValue(STRING_TYPE, TRIP_RELATION),
            resource_value(ResourceType.TRIP, trip_id),
        ),
    )
