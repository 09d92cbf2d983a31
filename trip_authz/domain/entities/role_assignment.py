"""RoleAssignment domain entity.

Binds one user to one role on one trip. The relational store enforces at
most one assignment per (trip_id, user_id); role changes replace the row
rather than adding a second one.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class RoleAssignment:
    """A user's role on a trip.

    Attributes:
        trip_id: Trip the role applies to.
        user_id: User holding the role.
        role_id: Identifier of the held role.
        created_at: When the assignment (or its latest replacement) was written.

    Example:
        >>> assignment = RoleAssignment(trip_id="t1", user_id="u1", role_id="r1")
        >>> assignment.trip_id
        't1'
    """

    trip_id: str
    user_id: str
    role_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, slots=True, kw_only=True)
class ParticipantChange:
    """Outcome of a role-assignment mutation.

    The local mutation is committed whenever a ParticipantChange is returned.
    ``policy_synced`` reports whether the policy service was updated too;
    False means a sync failure was recorded for reconciliation.

    Attributes:
        trip_id: Trip whose participants changed.
        user_id: User whose assignment changed.
        assignment: The assignment after the change (None after removal).
        previous_role_id: Role held before the change (None on creation).
        policy_synced: Whether the matching policy facts were written.
    """

    trip_id: str
    user_id: str
    assignment: RoleAssignment | None
    previous_role_id: str | None
    policy_synced: bool


@dataclass(frozen=True, slots=True, kw_only=True)
class Participant:
    """Read model of a trip member for participant listings.

    Attributes:
        user_id: Member's user id.
        display_name: Member's display name.
        role_name: Name of the member's role on the trip.
        joined_at: When the current assignment was written.
    """

    user_id: str
    display_name: str
    role_name: str
    joined_at: datetime
