"""Domain entities.

Pure data with no framework dependencies.
"""

from trip_authz.domain.entities.role import Role
from trip_authz.domain.entities.role_assignment import (
    Participant,
    ParticipantChange,
    RoleAssignment,
)
from trip_authz.domain.entities.sync_failure import SyncFailure

__all__ = [
    "Participant",
    "ParticipantChange",
    "Role",
    "RoleAssignment",
    "SyncFailure",
]
